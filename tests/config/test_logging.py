from __future__ import annotations

import logging

import pytest

from waterseams.config import ConfigurationError, configure_logging, get_log_level


def test_log_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WATERSEAMS_LOG_LEVEL", raising=False)

    assert get_log_level() == logging.INFO


def test_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WATERSEAMS_LOG_LEVEL", " debug ")

    assert get_log_level() == logging.DEBUG


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WATERSEAMS_LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError, match="chatty"):
        get_log_level()


def test_configure_logging_applies_level_when_forced() -> None:
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = root.handlers[:]
    try:
        configure_logging(level=logging.WARNING, force=True)
        assert root.level == logging.WARNING
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)
