"""Shared test configuration and fixtures for all tests."""

import pytest
from unittest.mock import MagicMock

from loadtrace.shared.config import Config
from .helpers import InstrumentedExecutor


@pytest.fixture
def mock_client():
    """Mock HTTP client fixture."""
    return MagicMock()


@pytest.fixture
def instrumented_executor():
    """Executor that tracks concurrency fixture."""
    return InstrumentedExecutor()


@pytest.fixture
def settings(monkeypatch, tmp_path):
    """Default settings isolated from the environment and any loadtrace.json."""
    monkeypatch.chdir(tmp_path)
    for name in list(Config.model_fields):
        monkeypatch.delenv(f"LOADTRACE_{name.upper()}", raising=False)
    return Config()
