"""Field normalization transform.

This module coerces the message to text, the timestamp to extended
ISO-8601 text, and integer severity levels to level names.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, tzinfo
from time import struct_time

from core.constants import TIMESTAMP_TIMESPEC
from core.errors import LogPayloadInputError


def normalize_message(message: object) -> str:
    """Convert a message into text.

    Args:
        message: Text, bytes, a character code, or a nested sequence of
            such fragments.

    Returns:
        Concatenated message text.

    Raises:
        LogPayloadInputError: If a fragment is not a valid character code.
    """
    if isinstance(message, str):
        return message
    if isinstance(message, (bytes, bytearray)):
        return bytes(message).decode("utf-8", errors="replace")
    if isinstance(message, Sequence):
        return "".join(_fragment_to_text(fragment) for fragment in message)
    if message is None:
        return ""
    return str(message)


def normalize_timestamp(timestamp: object, local_timezone: tzinfo | None = None) -> str:
    """Render a local calendar/time value as extended ISO-8601 text.

    Args:
        timestamp: datetime, date, struct_time, (date, time) pair, or a flat
            integer tuple (year, month, day[, hour, minute, second, microsecond]).
        local_timezone: Zone attached to naive values. The host zone is
            used when omitted.

    Returns:
        ISO-8601 timestamp with microseconds and UTC offset.

    Raises:
        LogPayloadInputError: If the value is not a recognized calendar shape.
    """
    naive_or_aware = _to_datetime(timestamp)
    if naive_or_aware.tzinfo is None:
        if local_timezone is None:
            qualified = naive_or_aware.astimezone()
        else:
            qualified = naive_or_aware.replace(tzinfo=local_timezone)
    else:
        qualified = naive_or_aware
    return qualified.isoformat(timespec=TIMESTAMP_TIMESPEC)


def normalize_level(level: object) -> object:
    """Map stdlib integer levels to lowercase level names.

    Symbolic and text levels pass through for the jsonify pass.
    """
    if isinstance(level, int) and not isinstance(level, bool):
        return logging.getLevelName(level).lower()
    return level


def _fragment_to_text(fragment: object) -> str:
    if isinstance(fragment, int) and not isinstance(fragment, bool):
        try:
            return chr(fragment)
        except (ValueError, OverflowError) as error:
            raise LogPayloadInputError(
                f"Message fragment {fragment} is not a valid character code."
            ) from error
    return normalize_message(fragment)


def _to_datetime(timestamp: object) -> datetime:
    if isinstance(timestamp, datetime):
        return timestamp
    if isinstance(timestamp, date):
        return datetime.combine(timestamp, time())
    if isinstance(timestamp, struct_time):
        try:
            return datetime(*timestamp[:6])
        except ValueError as error:
            raise LogPayloadInputError(
                f"Invalid struct_time {tuple(timestamp)!r}: {error}."
            ) from error
    if isinstance(timestamp, tuple):
        return _tuple_to_datetime(timestamp)
    raise LogPayloadInputError(
        f"Unsupported timestamp type {type(timestamp).__name__}. "
        "Provide a datetime, date, struct_time, or calendar tuple."
    )


def _tuple_to_datetime(timestamp: tuple[object, ...]) -> datetime:
    if len(timestamp) == 2:
        day_part, time_part = timestamp
        if isinstance(day_part, date) and isinstance(time_part, time):
            return datetime.combine(day_part, time_part)
    if 3 <= len(timestamp) <= 7 and all(_is_plain_int(part) for part in timestamp):
        try:
            return datetime(*timestamp)  # type: ignore[arg-type]
        except ValueError as error:
            raise LogPayloadInputError(f"Invalid calendar tuple {timestamp!r}: {error}.") from error
    raise LogPayloadInputError(
        f"Unsupported calendar tuple {timestamp!r}. "
        "Use (date, time) or (year, month, day[, hour, minute, second, microsecond])."
    )


def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
