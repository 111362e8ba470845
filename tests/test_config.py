"""Tests for settings and logging configuration."""

import logging
import sys

import pytest

from model2schema.config import Settings, get_logger, setup_logging
from model2schema.config.logging import LOG_FORMAT
from model2schema.config import settings as settings_module


@pytest.fixture(autouse=True)
def restore_logger():
    package_logger = logging.getLogger("model2schema")
    handlers = list(package_logger.handlers)
    propagate = package_logger.propagate
    level = package_logger.level
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers[:] = handlers
    package_logger.propagate = propagate
    package_logger.setLevel(level)


def test_settings_from_environment(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("STRATEGY", "jsonschema")
    monkeypatch.setenv("UNKNOWN_RULES", "warn")
    monkeypatch.setenv("INDENT", "4")
    settings = Settings()
    assert settings.strategy == "jsonschema"
    assert settings.unknown_rules == "warn"
    assert settings.indent == 4


def test_settings_rejects_unknown_strategy(monkeypatch):
    """Test strategy validation."""
    monkeypatch.setenv("STRATEGY", "swagger")
    with pytest.raises(ValueError):
        Settings()


def test_log_file_directory_created(tmp_path):
    """Test that the log file directory is created."""
    log_file = tmp_path / "logs" / "model2schema.log"
    Settings(log_file=log_file)
    assert log_file.parent.is_dir()


def test_get_settings_cached(monkeypatch):
    """Test that get_settings returns one instance."""
    monkeypatch.setattr(settings_module, "_settings", None)
    assert settings_module.get_settings() is settings_module.get_settings()


def test_setup_logging(tmp_path):
    """Test console and file handlers."""
    log_file = tmp_path / "run.log"
    setup_logging(level="DEBUG", log_file=log_file)

    package_logger = logging.getLogger("model2schema")
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 2
    assert package_logger.propagate is False

    get_logger("tests.config").debug("hello from tests")
    for handler in package_logger.handlers:
        handler.flush()
    assert "hello from tests" in log_file.read_text(encoding="utf-8")


def test_setup_logging_replaces_handlers(tmp_path):
    """Test that repeated setup keeps one console handler with the package format."""
    setup_logging(level="INFO", log_file=tmp_path / "first.log")
    setup_logging(level="WARNING")

    package_logger = logging.getLogger("model2schema")
    assert package_logger.level == logging.WARNING
    assert len(package_logger.handlers) == 1
    handler = package_logger.handlers[0]
    assert handler.stream is sys.stderr
    assert handler.formatter._fmt == LOG_FORMAT


def test_get_logger_names():
    """Test logger naming under the package root."""
    assert get_logger("model2schema.mapping").name == "model2schema.mapping"
    assert get_logger("cli").name == "model2schema.cli"
