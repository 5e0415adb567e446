"""Tests for environment-driven settings."""

import pydantic
import pytest
import structlog

from prefix_purge.core import observability
from prefix_purge.core.config import Settings


def test_defaults(monkeypatch):
    """Test defaults when no environment overrides are set."""
    monkeypatch.delenv("PREFIX_PURGE_DELETE_BATCH_SIZE", raising=False)
    settings = Settings()

    assert settings.delete_batch_size == 1000
    assert settings.otel_enabled is False


def test_env_override(monkeypatch):
    """Test PREFIX_PURGE_ variables override defaults."""
    monkeypatch.setenv("PREFIX_PURGE_DELETE_BATCH_SIZE", "250")
    monkeypatch.setenv("PREFIX_PURGE_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.delete_batch_size == 250
    assert settings.log_level == "debug"


def test_batch_size_bounds(monkeypatch):
    """Test a batch size above the store limit is rejected."""
    monkeypatch.setenv("PREFIX_PURGE_DELETE_BATCH_SIZE", "1001")

    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_log_format(monkeypatch):
    """Test the log format accepts console and rejects unknown values."""
    monkeypatch.setenv("PREFIX_PURGE_LOG_FORMAT", "console")
    assert Settings().log_format == "console"

    monkeypatch.setenv("PREFIX_PURGE_LOG_FORMAT", "xml")
    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_console_renderer_selected(monkeypatch):
    """Test setup_logging picks the renderer from settings."""
    monkeypatch.setattr(observability.settings, "log_format", "console")
    assert isinstance(observability._renderer(), structlog.dev.ConsoleRenderer)

    monkeypatch.setattr(observability.settings, "log_format", "json")
    assert isinstance(
        observability._renderer(), structlog.processors.JSONRenderer
    )
