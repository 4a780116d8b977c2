"""Unit tests for jsonify safety pass."""

from __future__ import annotations

import json
from collections import OrderedDict
from datetime import datetime, timezone
from enum import Enum, IntEnum
from types import MappingProxyType

from core.types import LogLevel, ProcessRef
from transforms.jsonify import enum_text, jsonify, key_text


class Phase(Enum):
    STARTUP = 1


class Priority(IntEnum):
    HIGH = 2


def test_enum_values_and_keys_become_text() -> None:
    """Symbolic tags in keys and values are rendered as text."""
    payload = {"level": LogLevel.INFO, Phase.STARTUP: [Phase.STARTUP, Priority.HIGH]}

    assert jsonify(payload) == {"level": "info", "STARTUP": ["STARTUP", "HIGH"]}


def test_enum_text_prefers_string_values() -> None:
    """String-valued enums render their value, others their name."""
    assert enum_text(LogLevel.WARNING) == "warning"
    assert enum_text(Phase.STARTUP) == "STARTUP"


def test_non_plain_mappings_become_dicts() -> None:
    """Mapping proxies and ordered dicts become plain dicts."""
    payload = MappingProxyType({"a": OrderedDict([("b", 1)])})

    converted = jsonify(payload)

    assert converted == {"a": {"b": 1}}
    assert type(converted) is dict
    assert type(converted["a"]) is dict  # type: ignore[index]


def test_keyword_lists_become_dicts() -> None:
    """Lists of (tag, value) pairs become mappings."""
    assert jsonify([(Phase.STARTUP, 1), (LogLevel.ERROR, "x")]) == {"STARTUP": 1, "error": "x"}


def test_leaf_values_become_json_safe() -> None:
    """Bytes, datetimes, process refs, and unknown objects become text."""
    payload = {
        "raw": b"caf\xc3\xa9",
        "at": datetime(2024, 5, 1, tzinfo=timezone.utc),
        "ref": ProcessRef(pid=3),
        "tags": {"b"},
        "other": object,
        7: None,
    }

    converted = jsonify(payload)

    assert converted["raw"] == "café"  # type: ignore[index]
    assert converted["at"] == "2024-05-01T00:00:00+00:00"  # type: ignore[index]
    assert converted["ref"] == "<3>"  # type: ignore[index]
    assert converted["tags"] == ["b"]  # type: ignore[index]
    assert converted["7"] is None  # type: ignore[index]
    json.dumps(converted)


def test_key_text_handles_non_text_keys() -> None:
    """Numeric and bytes keys are stringified."""
    assert key_text(1) == "1"
    assert key_text(b"k") == "k"


def test_jsonify_is_idempotent() -> None:
    """Jsonified payloads pass through unchanged."""
    payload = {"a": [LogLevel.DEBUG, {"b": (1, 2.5, True, None)}]}

    once = jsonify(payload)

    assert jsonify(once) == once
    assert once == {"a": ["debug", {"b": [1, 2.5, True, None]}]}


def test_clashing_keys_are_renamed_not_dropped() -> None:
    """Non-text keys whose text is taken get their type name appended."""
    converted = jsonify({1: "int-key", "1": "str-key", Phase.STARTUP: 1, "STARTUP": 2})

    assert converted == {"1_int": "int-key", "1": "str-key", "STARTUP_Phase": 1, "STARTUP": 2}
    assert jsonify(converted) == converted


def test_clash_rename_skips_taken_names() -> None:
    """Renamed keys never overwrite an existing text key."""
    converted = jsonify({1: "a", "1": "b", "1_int": "c"})

    assert converted == {"1_int_": "a", "1": "b", "1_int": "c"}


def test_sets_become_sorted_lists() -> None:
    """Set members are ordered independently of hash order."""
    assert jsonify({"tags": {"b", "c", "a"}}) == {"tags": ["a", "b", "c"]}
    assert jsonify(frozenset({3, 1, 2})) == [1, 2, 3]
