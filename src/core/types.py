"""Shared typed models.

This module defines immutable data models that flow between the
field, metadata, context, and payload stages of the encoder.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol, cast, runtime_checkable

from core.errors import LogPayloadInputError


class LogLevel(str, Enum):
    """Symbolic severity tags accepted by the encoder."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"


class ValueKind(Enum):
    """Closed set of value shapes handled by recursive metadata conversion."""

    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    TAGGED_RECORD = "tagged_record"
    TAGGED_PAIR = "tagged_pair"


@runtime_checkable
class FieldMapping(Protocol):
    """Structured record that can flatten itself into named fields."""

    def to_fields(self) -> Mapping[str, object]:
        """Return the record fields as a plain mapping."""
        ...


@dataclass(frozen=True)
class ProcessRef:
    """Identifier of the process (and optionally thread) that emitted an event.

    Attributes:
        pid: Operating system process id.
        thread_id: Optional thread identifier within the process.
    """

    pid: int
    thread_id: int | None = None

    @classmethod
    def current(cls) -> "ProcessRef":
        """Capture the calling process and thread."""
        return cls(pid=os.getpid(), thread_id=threading.get_ident())

    def display(self) -> str:
        """Render the human-readable form used in log metadata."""
        if self.thread_id is None:
            return f"<{self.pid}>"
        return f"<{self.pid}.{self.thread_id}>"


@dataclass(frozen=True)
class RawLogEvent:
    """Loosely typed log event as produced by a logging front end.

    Attributes:
        timestamp: Calendar/time value without an embedded zone.
        level: Severity tag.
        message: Text, bytes, or a nested sequence of text fragments.
        metadata: Free-form mapping with arbitrary values.
    """

    timestamp: Any
    level: Any
    message: Any
    metadata: Mapping[Any, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizedLogRecord:
    """Log event with canonical timestamp, text message, and flat metadata."""

    timestamp: str
    level: Any
    message: str
    metadata: Mapping[Any, Any]


@dataclass(frozen=True)
class LogContext:
    """Metadata partitioned into recognized system keys and user keys.

    Attributes:
        system: Entries whose keys belong to the recognized key set.
        user: All remaining entries.
    """

    system: Mapping[Any, Any]
    user: Mapping[Any, Any]


@dataclass(frozen=True)
class ContextSplitRecord:
    """Normalized record whose metadata was split into a LogContext."""

    timestamp: str
    level: Any
    message: str
    context: LogContext


@dataclass(frozen=True)
class EncodeFailure:
    """Described precondition failure for one log event.

    Attributes:
        stage: Pipeline stage that rejected the event.
        reason: Human-readable failure description.
    """

    stage: str
    reason: str


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of encoding one log event.

    Exactly one of ``payload`` and ``failure`` is set.
    """

    payload: dict[str, object] | None = None
    failure: EncodeFailure | None = None

    @property
    def ok(self) -> bool:
        """Whether the event was encoded successfully."""
        return self.failure is None

    def unwrap(self) -> dict[str, object]:
        """Return the payload or raise the recorded failure.

        Raises:
            LogPayloadInputError: If encoding failed.
        """
        if self.failure is not None:
            raise LogPayloadInputError(self.failure.reason, stage=self.failure.stage)
        return cast("dict[str, object]", self.payload)
