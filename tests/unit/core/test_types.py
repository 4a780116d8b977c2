"""Unit tests for shared typed models."""

from __future__ import annotations

import os

import pytest

from core.errors import LogPayloadInputError
from core.types import EncodeFailure, EncodeResult, ProcessRef


def test_process_ref_display_without_thread() -> None:
    """Process-only references render the bare pid."""
    assert ProcessRef(pid=4242).display() == "<4242>"


def test_process_ref_display_with_thread() -> None:
    """Thread-qualified references render pid and thread id."""
    assert ProcessRef(pid=4242, thread_id=7).display() == "<4242.7>"


def test_process_ref_current_captures_calling_process() -> None:
    """Current reference should point at this interpreter."""
    ref = ProcessRef.current()

    assert ref.pid == os.getpid()
    assert ref.thread_id is not None


def test_encode_result_unwrap_returns_payload() -> None:
    """Successful results unwrap to their payload."""
    result = EncodeResult(payload={"message": "ok"})

    assert result.ok
    assert result.unwrap() == {"message": "ok"}


def test_encode_result_unwrap_raises_failure() -> None:
    """Failed results re-raise with the failing stage attached."""
    result = EncodeResult(failure=EncodeFailure(stage="timestamp", reason="bad shape"))

    with pytest.raises(LogPayloadInputError) as error_info:
        result.unwrap()

    assert not result.ok
    assert error_info.value.stage == "timestamp"
