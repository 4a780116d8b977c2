"""Charlist-to-text transform.

This module finds sequences made entirely of printable character codes
and renders them as text. It runs after metadata flattening and again
over the assembled payload.

The detection is a heuristic: a list of small integers that all happen
to be printable codes (``[104, 105]``) cannot be told apart from text
and is rewritten to ``"hi"``. An empty list is vacuously printable and
becomes ``""``. Receivers expect this rendering on the wire.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from core.constants import PRINTABLE_CHAR_CODE_RANGE, PRINTABLE_CONTROL_CHAR_CODES


def encode_metadata_charlists(value: object) -> object:
    """Recursively replace printable charlists with text.

    Mapping values and sequence elements are inspected; the top-level
    value itself is never converted.

    Args:
        value: Mapping, sequence, or leaf value.

    Returns:
        New value with printable charlists rendered as text.
    """
    if isinstance(value, Mapping):
        return {key: _convert_nested(item) for key, item in value.items()}
    if _is_sequence(value):
        return [_convert_nested(item) for item in value]
    return value


def is_printable_charlist(value: Sequence[object]) -> bool:
    """Check whether every element is a printable character code."""
    return all(_is_printable_char_code(item) for item in value)


def _convert_nested(value: object) -> object:
    if _is_sequence(value) and is_printable_charlist(value):
        return "".join(chr(code) for code in value)
    if isinstance(value, Mapping) or _is_sequence(value):
        return encode_metadata_charlists(value)
    return value


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray, tuple))


def _is_printable_char_code(value: object) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    low, high = PRINTABLE_CHAR_CODE_RANGE
    return low <= value <= high or value in PRINTABLE_CONTROL_CHAR_CODES
