"""Shared fixtures for smartfield tests."""

import pytest

from smartfield.service import ValidationService, reset_default_service
from smartfield.timers import VirtualScheduler


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Start every test from a fresh default service and clean settings."""
    for name in (
        "SMARTFIELD_MIN_CHANGE_THRESHOLD",
        "SMARTFIELD_TOUCHED_DELAY_MS",
        "SMARTFIELD_FIELDS_PATH",
        "SMARTFIELD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_default_service()
    yield
    reset_default_service()


@pytest.fixture
def service():
    return ValidationService()


@pytest.fixture
def scheduler():
    return VirtualScheduler()
