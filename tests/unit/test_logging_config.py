"""Tests for logging configuration."""

import logging

import pytest

from ourmemories import logging_config
from ourmemories.logging_config import configure_structured_logging, get_log_level, is_development_environment


class TestLogLevel:
    """Test cases for get_log_level."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("nonsense", logging.INFO)],
    )
    def test_levels(self, monkeypatch, raw, expected):
        monkeypatch.setenv("LOG_LEVEL", raw)
        assert get_log_level() == expected

    def test_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO


class TestConfigureLogging:
    """Test cases for configure_structured_logging."""

    def test_environment_detection(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "local")
        assert is_development_environment()
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert not is_development_environment()

    def test_configures_once(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_configured_component", None)

        configure_structured_logging(component="api")
        configure_structured_logging(component="ui")

        assert logging_config._configured_component == "api"

    def test_force_reconfigures(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_configured_component", "ui")

        configure_structured_logging(component="api", force=True)

        assert logging_config._configured_component == "api"
