"""Metadata normalization transform.

This module rewrites free-form event metadata into plain mappings,
lists, and primitives. Process references become display text, crash
reasons become a formatted ``stacktrace`` entry, and records and
tuples are flattened before the charlist pass runs.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence

from core.constants import (
    CRASH_REASON_METADATA_KEY,
    PID_METADATA_KEY,
    STACKTRACE_METADATA_KEY,
)
from core.errors import LogPayloadInputError
from core.types import FieldMapping, ProcessRef, ValueKind
from transforms.charlists import encode_metadata_charlists
from transforms.jsonify import key_text
from transforms.stacktrace_format import StacktraceFormatter, format_stacktrace


def normalize_metadata(
    metadata: object,
    stacktrace_formatter: StacktraceFormatter = format_stacktrace,
) -> dict[object, object]:
    """Run every metadata encoding step in order.

    Args:
        metadata: Raw metadata mapping.
        stacktrace_formatter: Callable rendering crash stack traces.

    Returns:
        New flattened metadata mapping.

    Raises:
        LogPayloadInputError: If metadata is not a mapping or the crash
            reason is not an ``(error, stacktrace)`` pair.
    """
    if not isinstance(metadata, Mapping):
        raise LogPayloadInputError(
            f"Metadata must be a mapping, got {type(metadata).__name__}."
        )
    encoded = encode_pid(metadata)
    encoded = encode_crash_reason(encoded, stacktrace_formatter)
    flattened = traverse_convert(encoded)
    return encode_metadata_charlists(flattened)  # type: ignore[return-value]


def encode_pid(metadata: Mapping[object, object]) -> dict[object, object]:
    """Replace a ProcessRef under the ``pid`` key with its display text."""
    encoded = dict(metadata)
    pid_key = _find_key(encoded, PID_METADATA_KEY)
    if pid_key is not None and isinstance(encoded[pid_key], ProcessRef):
        encoded[pid_key] = encoded[pid_key].display()  # type: ignore[union-attr]
    return encoded


def encode_crash_reason(
    metadata: Mapping[object, object],
    stacktrace_formatter: StacktraceFormatter = format_stacktrace,
) -> dict[object, object]:
    """Swap a ``crash_reason`` pair for a formatted ``stacktrace`` entry.

    Raises:
        LogPayloadInputError: If the crash reason is not a two-element pair.
    """
    encoded = dict(metadata)
    crash_key = _find_key(encoded, CRASH_REASON_METADATA_KEY)
    if crash_key is None or encoded[crash_key] is None:
        return encoded
    crash_reason = encoded.pop(crash_key)
    if not isinstance(crash_reason, (tuple, list)) or len(crash_reason) != 2:
        raise LogPayloadInputError(
            "Crash reason must be an (error, stacktrace) pair, "
            f"got {type(crash_reason).__name__}."
        )
    _error, stacktrace = crash_reason
    encoded[STACKTRACE_METADATA_KEY] = stacktrace_formatter(stacktrace)
    return encoded


def crash_reason_from_exception(error: BaseException) -> tuple[BaseException, object]:
    """Build an ``(error, stacktrace)`` pair from a raised exception."""
    return (error, error.__traceback__)


def classify_value(value: object) -> ValueKind:
    """Classify a metadata value into one of the converter shapes."""
    if isinstance(value, (str, bytes, bytearray, ProcessRef)):
        return ValueKind.PRIMITIVE
    if isinstance(value, FieldMapping) or _is_dataclass_instance(value):
        return ValueKind.TAGGED_RECORD
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, tuple):
        return ValueKind.TAGGED_PAIR
    if isinstance(value, Sequence):
        return ValueKind.SEQUENCE
    return ValueKind.PRIMITIVE


def traverse_convert(value: object) -> object:
    """Recursively flatten records, tuples, and nested containers.

    Records lose their type and become field mappings, tuples become
    lists, and mapping keys are left untouched.
    """
    kind = classify_value(value)
    if kind is ValueKind.SEQUENCE:
        return [traverse_convert(item) for item in value]  # type: ignore[attr-defined]
    if kind is ValueKind.TAGGED_RECORD:
        return traverse_convert(_record_fields(value))
    if kind is ValueKind.MAPPING:
        return {key: traverse_convert(item) for key, item in value.items()}  # type: ignore[attr-defined]
    if kind is ValueKind.TAGGED_PAIR:
        return [traverse_convert(item) for item in value]  # type: ignore[attr-defined]
    if isinstance(value, ProcessRef):
        return value.display()
    return value


def _record_fields(record: object) -> dict[str, object]:
    if isinstance(record, FieldMapping):
        return dict(record.to_fields())
    return {
        record_field.name: getattr(record, record_field.name)
        for record_field in dataclasses.fields(record)  # type: ignore[arg-type]
    }


def _is_dataclass_instance(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _find_key(metadata: Mapping[object, object], name: str) -> object | None:
    if name in metadata:
        return name
    for key in metadata:
        if key_text(key) == name:
            return key
    return None
