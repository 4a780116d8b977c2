"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

import pytest

from cli.main import main
from tests.fixture_paths import config_fixture, event_fixture


def test_cli_encode_prints_payload(capsys) -> None:
    """CLI encode should print the JSON payload."""
    args = ["--timezone", "UTC", "encode", event_fixture("request.json")]

    exit_code = main(args)
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload == {
        "timestamp": "2024-05-01T12:30:00.000000+00:00",
        "level": "info",
        "message": "hello world",
        "metadata": {
            "request_id": "abc",
            "codes": "hi",
            "sizes": [1, 999999],
            "context": {"module": "Foo"},
        },
    }


def test_cli_encode_uses_config_file(capsys) -> None:
    """Config file keys and zone should drive the split."""
    args = ["--config", config_fixture("valid.yaml"), "encode", event_fixture("request.json")]

    exit_code = main(args)
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["metadata"]["context"] == {"module": "Foo"}
    assert payload["timestamp"].endswith("+00:00")


@pytest.mark.parametrize("file_name", ["bad_timestamp.json", "bad_metadata.json"])
def test_cli_encode_returns_error_code_for_invalid_events(file_name: str, capsys) -> None:
    """Precondition failures should exit with status 1 and print nothing."""
    exit_code = main(["--timezone", "UTC", "encode", event_fixture(file_name)])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_cli_keys_lists_configured_keys(capsys) -> None:
    """Keys command should print the recognized keys sorted."""
    exit_code = main(["--config", config_fixture("valid.yaml"), "keys"])
    output = capsys.readouterr().out.split()

    assert exit_code == 0
    assert output == ["file", "function", "line", "module"]
