"""Core constants used across logpayload modules.

This module centralizes reserved metadata key names and defaults.
Keeping values here avoids magic literals in transform logic.
"""

from __future__ import annotations

PID_METADATA_KEY = "pid"
CRASH_REASON_METADATA_KEY = "crash_reason"
STACKTRACE_METADATA_KEY = "stacktrace"
CONTEXT_METADATA_KEY = "context"
CONTEXT_COLLISION_PREFIX = "user_"
DEFAULT_METADATA_KEYS = (
    "application",
    "module",
    "function",
    "file",
    "line",
    "pid",
    "thread",
    "process_name",
    "logger",
    "initial_call",
    "registered_name",
    "domain",
    "mfa",
    "time",
)
PRINTABLE_CHAR_CODE_RANGE = (32, 126)
PRINTABLE_CONTROL_CHAR_CODES = frozenset({7, 8, 9, 10, 11, 12, 13, 27, 127})
UTC_TIMEZONE_NAMES = ("UTC", "Z", "Etc/UTC")
TIMESTAMP_TIMESPEC = "microseconds"
METADATA_KEYS_ENV_VAR = "LOGPAYLOAD_METADATA_KEYS"
TIMEZONE_ENV_VAR = "LOGPAYLOAD_TIMEZONE"
