"""Runtime configuration model for logpayload.

This module owns environment variable and YAML config parsing.
Encoders consume a typed config object instead of process-wide constants.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timezone, tzinfo
import os
from pathlib import Path
from typing import Iterable, Mapping, Sequence, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.constants import (
    DEFAULT_METADATA_KEYS,
    METADATA_KEYS_ENV_VAR,
    TIMEZONE_ENV_VAR,
    UTC_TIMEZONE_NAMES,
)
from core.errors import LogPayloadConfigError, LogPayloadDependencyError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
_ALLOWED_CONFIG_KEYS = {"metadata_keys", "timezone"}


@dataclass(frozen=True)
class PayloadConfig:
    """Validated encoder configuration.

    Attributes:
        metadata_keys: Recognized metadata key names routed to system context.
        timezone: Optional IANA zone name used to qualify naive timestamps.
            When unset, the host zone is resolved per timestamp.
    """

    metadata_keys: frozenset[str]
    timezone: str | None = None

    @classmethod
    def default(cls) -> "PayloadConfig":
        """Build config with the default recognized metadata keys."""
        return cls(metadata_keys=frozenset(DEFAULT_METADATA_KEYS))

    @classmethod
    def from_env(cls) -> "PayloadConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LogPayloadConfigError: If environment values are invalid.
        """
        raw_keys = os.getenv(METADATA_KEYS_ENV_VAR)
        metadata_keys = (
            frozenset(DEFAULT_METADATA_KEYS)
            if raw_keys is None
            else _parse_metadata_keys_env(raw_keys)
        )
        raw_timezone = os.getenv(TIMEZONE_ENV_VAR)
        timezone_name = raw_timezone.strip() if raw_timezone and raw_timezone.strip() else None
        config = cls(metadata_keys=metadata_keys, timezone=timezone_name)
        config.resolve_timezone()
        return config

    def with_metadata_keys(self, metadata_keys: Iterable[str]) -> "PayloadConfig":
        """Return a copy using a different recognized key set."""
        return replace(self, metadata_keys=frozenset(metadata_keys))

    def resolve_timezone(self) -> tzinfo | None:
        """Resolve the configured zone name into a tzinfo.

        Returns:
            Zone object, or None when the host zone should be used.

        Raises:
            LogPayloadConfigError: If the zone name is unknown.
        """
        if self.timezone is None:
            return None
        if self.timezone in UTC_TIMEZONE_NAMES:
            return timezone.utc
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as error:
            raise LogPayloadConfigError(
                f"Unknown timezone '{self.timezone}'. Use an IANA name such as 'Europe/Berlin'."
            ) from error


def load_payload_config(config_path: str) -> PayloadConfig:
    """Load and validate a YAML encoder config from disk.

    Args:
        config_path: File path to YAML config.

    Returns:
        Validated config object.

    Raises:
        LogPayloadDependencyError: If PyYAML is unavailable.
        LogPayloadConfigError: If file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(config_path)
    root_mapping = _expect_mapping(payload, "config root")
    _validate_root_keys(root_mapping)
    metadata_keys = _parse_metadata_keys(root_mapping)
    timezone_name = _optional_string(root_mapping, "timezone")
    config = PayloadConfig(metadata_keys=metadata_keys, timezone=timezone_name)
    config.resolve_timezone()
    _LOGGER.info(
        "payload_config_loaded",
        source=config_path,
        metadata_key_count=len(config.metadata_keys),
    )
    return config


def _parse_metadata_keys_env(raw_value: str) -> frozenset[str]:
    """Parse the comma-separated recognized key list.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Recognized key names.

    Raises:
        LogPayloadConfigError: If the list contains blank entries.
    """
    if not raw_value.strip():
        return frozenset()
    keys = [key.strip() for key in raw_value.split(",")]
    if any(not key for key in keys):
        raise LogPayloadConfigError(
            f"Invalid {METADATA_KEYS_ENV_VAR} value: '{raw_value}'. "
            "Use a comma-separated list of key names without blank entries."
        )
    return frozenset(keys)


def _load_yaml_payload(config_path: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise LogPayloadDependencyError(
            "YAML config support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    config_file = Path(config_path).expanduser().resolve()
    if not config_file.exists():
        raise LogPayloadConfigError(
            f"Config file does not exist at {config_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(config_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise LogPayloadConfigError(
            f"Failed to read config at {config_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise LogPayloadConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise LogPayloadConfigError(
            f"Config at {config_file} is empty. Define 'metadata_keys'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise LogPayloadConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise LogPayloadConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise LogPayloadConfigError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_metadata_keys(root_mapping: Mapping[str, object]) -> frozenset[str]:
    raw_keys = root_mapping.get("metadata_keys")
    if raw_keys is None:
        return frozenset(DEFAULT_METADATA_KEYS)
    key_rows = _expect_sequence(raw_keys, "config metadata_keys")
    parsed_keys = set()
    for index, key in enumerate(key_rows):
        if not isinstance(key, str) or not key.strip():
            raise LogPayloadConfigError(
                f"Invalid config metadata_keys entry #{index + 1}: expected non-empty string."
            )
        parsed_keys.add(key.strip())
    return frozenset(parsed_keys)


def _optional_string(mapping: Mapping[str, object], field_name: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = raw_value.strip()
        return normalized_value if normalized_value else None
    raise LogPayloadConfigError(f"Config field '{field_name}' must be a string when provided.")


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    unknown_keys = sorted(set(root_mapping) - _ALLOWED_CONFIG_KEYS)
    if unknown_keys:
        raise LogPayloadConfigError(
            f"Config contains unknown root fields: {', '.join(unknown_keys)}."
        )
