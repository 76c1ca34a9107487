"""Typed smoke tests for the settings loader.

The `monkeypatch` fixture is annotated as `Any`, which keeps the tests fully
typed without importing pytest's internals.

These tests verify four guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) `get_logger()` respects the configured LOG_LEVEL when constructing loggers.
4) Renderer hints and the default locale are read from `CHRONOLINE_*` vars.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import ValidationError

from chronoline.core.settings import (
    Settings,
    get_logger,
    load_settings,
    settings,
)


def test_settings_instance_type() -> None:
    """`settings` should be an instance of the typed `Settings` model."""
    assert isinstance(settings, Settings)


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`.

    Steps
    -----
    1) Set CHRONOLINE_ENV to "test" and LOG_LEVEL to "DEBUG" via `monkeypatch`.
    2) Clear the loader cache so a new Settings instance is constructed.
    3) Assert that the new instance reflects the env overrides.
    """
    monkeypatch.setenv("CHRONOLINE_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    load_settings.cache_clear()
    s = load_settings()

    assert s.environment == "test"
    assert s.log_level == "DEBUG"
    load_settings.cache_clear()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `LOG_LEVEL`.

    A unique logger name avoids side effects between tests.
    """
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    load_settings.cache_clear()
    _ = load_settings()

    logger = get_logger("chronoline.tests.settings")

    assert logger.level == logging.ERROR
    assert logger.handlers, "Expected at least one StreamHandler to be attached."
    load_settings.cache_clear()


def test_locale_and_renderer_hints_from_env(monkeypatch: Any) -> None:
    """`CHRONOLINE_LOCALE` and the renderer hints map onto typed fields."""
    monkeypatch.setenv("CHRONOLINE_LOCALE", "ja")
    monkeypatch.setenv("CHRONOLINE_ROUND_RANGES", "true")
    monkeypatch.setenv("CHRONOLINE_USE_UTC", "false")

    load_settings.cache_clear()
    s = load_settings()

    assert s.locale == "ja"
    assert s.round_ranges is True
    assert s.use_utc is False
    load_settings.cache_clear()


def test_empty_locale_rejected(monkeypatch: Any) -> None:
    """An empty default locale is a configuration error, not a silent fallback."""
    monkeypatch.setenv("CHRONOLINE_LOCALE", "")
    with pytest.raises(ValidationError):
        Settings()
