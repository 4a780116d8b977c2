"""Public SDK surface for logpayload.

This module provides a stable import path for logging front ends.
It re-exports the encoder, its configuration, and typed models.
"""

from __future__ import annotations

from core.config import PayloadConfig, load_payload_config
from core.errors import LogPayloadConfigError, LogPayloadError, LogPayloadInputError
from core.types import (
    EncodeFailure,
    EncodeResult,
    FieldMapping,
    LogLevel,
    ProcessRef,
    RawLogEvent,
)
from payload.pipeline import PayloadEncoder, encode
from transforms.metadata_normalization import crash_reason_from_exception
from transforms.stacktrace_format import format_stacktrace

__all__ = [
    "EncodeFailure",
    "EncodeResult",
    "FieldMapping",
    "LogLevel",
    "LogPayloadConfigError",
    "LogPayloadError",
    "LogPayloadInputError",
    "PayloadConfig",
    "PayloadEncoder",
    "ProcessRef",
    "RawLogEvent",
    "crash_reason_from_exception",
    "encode",
    "format_stacktrace",
    "load_payload_config",
]
