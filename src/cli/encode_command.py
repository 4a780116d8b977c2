"""Encode CLI command wiring.

This module registers the encode subcommand, which reads one JSON log
event from disk and prints its encoded payload.
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

from core.errors import LogPayloadInputError
from core.logging_config import get_logger
from payload.pipeline import PayloadEncoder

_LOGGER = get_logger(__name__)


def add_encode_command(subparsers: Any) -> None:
    """Register encode subcommand."""
    parser = subparsers.add_parser(
        "encode",
        help="Encode a JSON log event file into a wire payload",
    )
    parser.add_argument("event_file", help="Path to JSON event with timestamp/level/message/metadata")


def run_encode_command(encoder: PayloadEncoder, args: argparse.Namespace) -> int:
    """Handle encode command invocation."""
    event = _read_event(args.event_file)
    try:
        timestamp = _parse_timestamp(event.get("timestamp"))
    except LogPayloadInputError as error:
        return _report_failure("timestamp", str(error))
    result = encoder.encode(
        timestamp,
        event.get("level"),
        event.get("message", ""),
        event.get("metadata", {}),
    )
    if result.failure is not None:
        return _report_failure(result.failure.stage, result.failure.reason)
    print(json.dumps(result.payload, sort_keys=True))
    return 0


def _read_event(event_file: str) -> Mapping[str, Any]:
    event_path = Path(event_file).expanduser().resolve()
    payload = json.loads(event_path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise SystemExit(f"Event file {event_path} must contain a JSON object.")
    return payload


def _parse_timestamp(raw_value: object) -> datetime:
    if not isinstance(raw_value, str):
        raise LogPayloadInputError("Event field 'timestamp' must be an ISO-8601 string.")
    try:
        return datetime.fromisoformat(raw_value)
    except ValueError as error:
        raise LogPayloadInputError(
            f"Event field 'timestamp' is not ISO-8601: '{raw_value}'."
        ) from error


def _report_failure(stage: str, reason: str) -> int:
    _LOGGER.error("payload_encode_failed", stage=stage, reason=reason)
    return 1
