"""Shared pytest fixtures for growseq tests."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
PYTHON_IMPL = REPO_ROOT / "implementation" / "python"
if str(PYTHON_IMPL) not in sys.path:
    sys.path.insert(0, str(PYTHON_IMPL))

from growseq.config import DEBUG_CHECKS_ENV, MAX_CAPACITY_ENV, reset_settings  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "property: hypothesis-driven property tests")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(MAX_CAPACITY_ENV, raising=False)
    monkeypatch.delenv(DEBUG_CHECKS_ENV, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def max_capacity(monkeypatch: pytest.MonkeyPatch):
    """Cap single allocations at the given number of slots."""

    def _apply(limit: int) -> None:
        monkeypatch.setenv(MAX_CAPACITY_ENV, str(limit))
        reset_settings()

    return _apply
