"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Add src to the Python path
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

# Fake program used as the child process in tests
FAKE_CLI_PATH = PROJECT_ROOT / "tests" / "fixtures" / "fake_cli.py"


@pytest.fixture
def fake_cli() -> list[str]:
    """argv prefix running the fake CLI with the current interpreter."""
    return [sys.executable, str(FAKE_CLI_PATH)]


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from EXECTEE_* variables in the caller's environment."""
    from exectee.config import reload_config

    monkeypatch.delenv("EXECTEE_CHUNK_SIZE", raising=False)
    monkeypatch.delenv("EXECTEE_LOG_DEBUG", raising=False)
    reload_config()
    yield
    reload_config()
