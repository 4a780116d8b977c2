"""Pytest configuration and shared fixtures for logpayload tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def utc_encoder():
    """Encoder with default keys that qualifies naive timestamps as UTC."""
    from core.config import PayloadConfig
    from payload.pipeline import PayloadEncoder

    return PayloadEncoder(PayloadConfig.default(), local_timezone=timezone.utc)


@pytest.fixture
def event_time() -> datetime:
    """Naive local timestamp shared by pipeline tests."""
    return datetime(2024, 5, 1, 12, 30, 0)
