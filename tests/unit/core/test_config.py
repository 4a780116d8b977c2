"""Unit tests for core config parsing."""

from __future__ import annotations

from datetime import timezone

import pytest

from core.config import PayloadConfig, load_payload_config
from core.constants import DEFAULT_METADATA_KEYS
from core.errors import LogPayloadConfigError
from tests.fixture_paths import config_fixture


def test_from_env_uses_default_keys_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the default recognized key set."""
    monkeypatch.delenv("LOGPAYLOAD_METADATA_KEYS", raising=False)
    monkeypatch.delenv("LOGPAYLOAD_TIMEZONE", raising=False)

    config = PayloadConfig.from_env()

    assert config.metadata_keys == frozenset(DEFAULT_METADATA_KEYS)
    assert config.timezone is None


def test_from_env_reads_comma_separated_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse the recognized key list from environment."""
    monkeypatch.setenv("LOGPAYLOAD_METADATA_KEYS", "module, function ,line")
    monkeypatch.setenv("LOGPAYLOAD_TIMEZONE", "UTC")

    config = PayloadConfig.from_env()

    assert config.metadata_keys == frozenset({"module", "function", "line"})
    assert config.resolve_timezone() is timezone.utc


def test_from_env_raises_for_blank_key_entry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject key lists with empty entries."""
    monkeypatch.setenv("LOGPAYLOAD_METADATA_KEYS", "module,,line")

    with pytest.raises(LogPayloadConfigError):
        PayloadConfig.from_env()


def test_from_env_empty_value_disables_system_context(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty key list routes every metadata key to user context."""
    monkeypatch.setenv("LOGPAYLOAD_METADATA_KEYS", "")

    assert PayloadConfig.from_env().metadata_keys == frozenset()


def test_with_metadata_keys_returns_new_config() -> None:
    """Deriving a key set should leave the original config untouched."""
    original = PayloadConfig.default()

    derived = original.with_metadata_keys(["request_id"])

    assert derived.metadata_keys == frozenset({"request_id"})
    assert "module" in original.metadata_keys


def test_load_payload_config_valid_file_parses_keys() -> None:
    """Valid YAML config should parse keys and timezone."""
    config = load_payload_config(config_fixture("valid.yaml"))

    assert config.metadata_keys == frozenset({"module", "function", "file", "line"})
    assert config.timezone == "UTC"


def test_load_payload_config_without_keys_uses_defaults() -> None:
    """Omitted metadata_keys should fall back to defaults."""
    config = load_payload_config(config_fixture("defaults_only.yaml"))

    assert config.metadata_keys == frozenset(DEFAULT_METADATA_KEYS)
    assert config.timezone is None


@pytest.mark.parametrize(
    "file_name",
    [
        "unknown_key.yaml",
        "invalid_keys.yaml",
        "blank_key.yaml",
        "broken.yaml",
        "unknown_timezone.yaml",
        "missing.yaml",
    ],
)
def test_load_payload_config_rejects_invalid_files(file_name: str) -> None:
    """Schema, syntax, and zone errors should raise config errors."""
    with pytest.raises(LogPayloadConfigError):
        load_payload_config(config_fixture(file_name))
