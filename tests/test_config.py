"""Tests for settings and logging configuration."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from paypal_liquidity.audit import configure_logging
from paypal_liquidity.config import (
    AppSettings,
    LoggingSettings,
    UploadSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestUploadSettings:
    """Tests for upload limits."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LIQUIDITY_UPLOAD_MAX_UPLOAD_SIZE_MB", raising=False)
        monkeypatch.delenv("LIQUIDITY_UPLOAD_ALLOWED_EXTENSIONS", raising=False)
        settings = UploadSettings()

        assert settings.max_upload_size_mb == 10
        assert settings.max_upload_size_bytes == 10 * 1024 * 1024
        assert settings.allowed_extensions_list == ["csv"]

    def test_from_environment(self, monkeypatch):
        """Values are read from LIQUIDITY_UPLOAD_ variables."""
        monkeypatch.setenv("LIQUIDITY_UPLOAD_MAX_UPLOAD_SIZE_MB", "5")
        monkeypatch.setenv("LIQUIDITY_UPLOAD_ALLOWED_EXTENSIONS", "csv,txt")

        upload = get_settings().upload

        assert upload.max_upload_size_bytes == 5 * 1024 * 1024
        assert upload.allowed_extensions_list == ["csv", "txt"]

    def test_size_bounds(self):
        with pytest.raises(ValidationError):
            UploadSettings(max_upload_size_mb=0)
        with pytest.raises(ValidationError):
            UploadSettings(max_upload_size_mb=51)

    def test_extension_list_normalized(self):
        settings = UploadSettings(allowed_extensions=" .CSV , txt ,, ")
        assert settings.allowed_extensions_list == ["csv", "txt"]

    def test_no_extensions_rejected(self):
        with pytest.raises(ValidationError):
            UploadSettings(allowed_extensions=" , . ")


class TestLoggingSettings:
    """Tests for logging configuration."""

    def test_level_normalized(self):
        assert LoggingSettings(level=" debug ").level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="verbose")

    def test_configure_logging(self):
        """The root logger follows the configured level."""
        root = logging.getLogger()
        previous_level = root.level
        previous_handlers = list(root.handlers)
        try:
            configure_logging(LoggingSettings(level="WARNING", json_output=False))
            assert root.level == logging.WARNING
        finally:
            structlog.reset_defaults()
            root.setLevel(previous_level)
            root.handlers[:] = previous_handlers

    def test_debug_overrides_level(self):
        root = logging.getLogger()
        previous_level = root.level
        previous_handlers = list(root.handlers)
        try:
            configure_logging(LoggingSettings(level="ERROR"), debug=True)
            assert root.level == logging.DEBUG
        finally:
            structlog.reset_defaults()
            root.setLevel(previous_level)
            root.handlers[:] = previous_handlers


class TestAppSettings:
    """Tests for application-wide switches."""

    def test_debug_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "true")
        assert get_settings().app.debug_mode is True

    def test_debug_mode_default(self, monkeypatch):
        monkeypatch.delenv("DEBUG_MODE", raising=False)
        assert AppSettings().debug_mode is False


class TestValidateAllSettings:
    """Tests for the startup check."""

    def test_all_valid(self, monkeypatch):
        monkeypatch.delenv("LIQUIDITY_LOG_LEVEL", raising=False)
        monkeypatch.delenv("LIQUIDITY_UPLOAD_MAX_UPLOAD_SIZE_MB", raising=False)
        results = validate_all_settings()
        assert results == {"upload": True, "logging": True, "app": True}

    def test_bad_group_reported(self, monkeypatch):
        """A broken group is reported without hiding the others."""
        monkeypatch.setenv("LIQUIDITY_LOG_LEVEL", "verbose")
        monkeypatch.delenv("LIQUIDITY_UPLOAD_MAX_UPLOAD_SIZE_MB", raising=False)

        results = validate_all_settings()

        assert results["logging"] is False
        assert "logging_error" in results
        assert results["upload"] is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
