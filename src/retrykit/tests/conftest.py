"""Shared fixtures: recorded async sleeps, clean settings and logging."""

from __future__ import annotations

import logging
import os

import pytest

from retrykit.config import clear_settings_cache

from .support import AsyncSleepRecorder


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> object:
    """Isolate every test from RETRYKIT_* variables and cached settings."""
    for key in [k for k in os.environ if k.startswith("RETRYKIT_")]:
        monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def clean_logging() -> object:
    """Drop handlers/levels configure_logging may have installed."""
    root = logging.getLogger("retrykit")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def async_sleeps() -> AsyncSleepRecorder:
    return AsyncSleepRecorder()

