"""Log event encoding pipeline.

This module composes field normalization, metadata normalization,
context splitting, and payload assembly into one pure transform.
Precondition failures are returned as an EncodeResult instead of
escaping from deep inside the recursive converters.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any

from core.config import PayloadConfig
from core.errors import LogPayloadInputError
from core.types import (
    ContextSplitRecord,
    EncodeFailure,
    EncodeResult,
    NormalizedLogRecord,
    RawLogEvent,
)
from transforms.charlists import encode_metadata_charlists
from transforms.context_split import build_context_record, to_payload
from transforms.field_normalization import (
    normalize_level,
    normalize_message,
    normalize_timestamp,
)
from transforms.jsonify import jsonify
from transforms.metadata_normalization import normalize_metadata
from transforms.stacktrace_format import StacktraceFormatter, format_stacktrace


class PayloadEncoder:
    """Stateless encoder turning raw log events into wire payloads."""

    def __init__(
        self,
        config: PayloadConfig | None = None,
        stacktrace_formatter: StacktraceFormatter = format_stacktrace,
        local_timezone: tzinfo | None = None,
    ) -> None:
        self._config = config or PayloadConfig.default()
        self._stacktrace_formatter = stacktrace_formatter
        if local_timezone is None:
            local_timezone = self._config.resolve_timezone()
        self._local_timezone = local_timezone

    @property
    def config(self) -> PayloadConfig:
        """Configuration this encoder was built with."""
        return self._config

    def encode(
        self,
        timestamp: Any,
        level: Any,
        message: Any,
        metadata: Any,
    ) -> EncodeResult:
        """Encode one log event into a JSON-safe payload.

        Args:
            timestamp: Local calendar/time value.
            level: Severity tag.
            message: Text or sequence of text fragments.
            metadata: Free-form metadata mapping.

        Returns:
            Result holding the payload, or the failing stage and reason.
        """
        event = RawLogEvent(timestamp=timestamp, level=level, message=message, metadata=metadata)
        return self.encode_event(event)

    def encode_event(self, event: RawLogEvent) -> EncodeResult:
        """Encode a RawLogEvent; see ``encode``."""
        try:
            record = self.split(event)
        except LogPayloadInputError as error:
            return EncodeResult(
                failure=EncodeFailure(stage=error.stage or "normalize", reason=str(error))
            )
        payload = encode_metadata_charlists(jsonify(to_payload(record)))
        return EncodeResult(payload=payload)  # type: ignore[arg-type]

    def normalize(self, event: RawLogEvent) -> NormalizedLogRecord:
        """Run field and metadata normalization.

        Raises:
            LogPayloadInputError: If the event violates the input contract.
        """
        message = _run_stage("message", normalize_message, event.message)
        timestamp = _run_stage(
            "timestamp", normalize_timestamp, event.timestamp, self._local_timezone
        )
        metadata = _run_stage(
            "metadata", normalize_metadata, event.metadata, self._stacktrace_formatter
        )
        return NormalizedLogRecord(
            timestamp=timestamp,
            level=normalize_level(event.level),
            message=message,
            metadata=metadata,
        )

    def split(self, event: RawLogEvent) -> ContextSplitRecord:
        """Normalize an event and split its metadata into context buckets.

        Raises:
            LogPayloadInputError: If the event violates the input contract.
        """
        return build_context_record(self.normalize(event), self._config.metadata_keys)


def encode(
    timestamp: Any,
    level: Any,
    message: Any,
    metadata: Any,
    config: PayloadConfig | None = None,
) -> EncodeResult:
    """Encode one log event with a default-configured encoder."""
    return PayloadEncoder(config).encode(timestamp, level, message, metadata)


def _run_stage(stage: str, transform: Any, *args: Any) -> Any:
    try:
        return transform(*args)
    except LogPayloadInputError as error:
        if error.stage is None:
            error.stage = stage
        raise
