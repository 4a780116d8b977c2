"""Logpayload exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class LogPayloadError(Exception):
    """Base exception for all logpayload failures."""


class LogPayloadConfigError(LogPayloadError):
    """Raised for invalid runtime configuration."""


class LogPayloadDependencyError(LogPayloadError):
    """Raised when an optional runtime dependency is missing."""


class LogPayloadInputError(LogPayloadError):
    """Raised when a log event violates the encoder input contract.

    Attributes:
        stage: Pipeline stage that rejected the event, when known.
    """

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage
