"""Jsonify safety pass.

This module deep-converts an assembled payload so that only text,
numbers, booleans, None, lists, and text-keyed dicts remain. Receivers
decode payloads in a restrictive mode that rejects symbolic tags.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from enum import Enum

from core.types import ProcessRef

_JSON_SCALARS = (str, int, float, bool, type(None))


def jsonify(value: object) -> object:
    """Convert a value tree into plain JSON-compatible values.

    The conversion is idempotent: jsonified output passes through unchanged.
    Keys whose text clashes after conversion are renamed, never dropped;
    see ``_text_keyed``. Lists of ``(Enum, value)`` pairs become mappings.
    Encoder payloads never contain such lists because tuples are flattened
    earlier, so only direct callers reach that rule. Sets become lists
    sorted by their JSON rendering.

    Args:
        value: Assembled payload or any nested value.

    Returns:
        New value with text keys and JSON-safe leaves.
    """
    if isinstance(value, Enum):
        return enum_text(value)
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, Mapping):
        return _text_keyed(list(value.items()))
    if _is_keyword_list(value):
        return _text_keyed(value)  # type: ignore[arg-type]
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        items = [jsonify(item) for item in value]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))
    if isinstance(value, Sequence):
        return [jsonify(item) for item in value]
    return _leaf_text(value)


def key_text(key: object) -> str:
    """Render a mapping key as text."""
    if isinstance(key, Enum):
        return enum_text(key)
    if isinstance(key, str):
        return key
    if isinstance(key, (bytes, bytearray)):
        return bytes(key).decode("utf-8", errors="replace")
    return str(key)


def enum_text(member: Enum) -> str:
    """Render a symbolic tag as its text value, or its name otherwise."""
    if isinstance(member.value, str):
        return member.value
    return member.name


def _text_keyed(pairs: list[tuple[object, object]]) -> dict[str, object]:
    """Build a text-keyed dict without losing entries to key clashes.

    Plain string keys keep their text. Any other key whose text is already
    taken gets its type name appended, e.g. ``1`` next to ``"1"`` becomes
    ``"1_int"``, with trailing underscores added until the name is free.
    """
    taken = {key for key, _item in pairs if type(key) is str}
    names: list[str] = []
    for key, _item in pairs:
        if type(key) is str:
            names.append(key)  # type: ignore[arg-type]
            continue
        name = key_text(key)
        if name in taken:
            name = f"{name}_{type(key).__name__}"
            while name in taken:
                name += "_"
        taken.add(name)
        names.append(name)
    return {name: jsonify(item) for name, (_key, item) in zip(names, pairs)}


def _is_keyword_list(value: object) -> bool:
    if not isinstance(value, list) or not value:
        return False
    return all(
        isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], Enum)
        for item in value
    )


def _leaf_text(value: object) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, ProcessRef):
        return value.display()
    return str(value)
