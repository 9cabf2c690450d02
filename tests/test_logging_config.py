"""Tests for clarify/logging_config.py."""

import json
import logging
import sys

import pytest

from clarify.logging_config import JSONFormatter, build_formatter, configure_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest left it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:

    def test_sets_level_and_single_handler(self, restore_root_logger):
        configure_logging(level="debug", format_style="simple")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.handlers[0].stream is sys.stdout

    def test_invalid_level_defaults_to_info(self, restore_root_logger, capsys):
        configure_logging(level="LOUD")

        assert restore_root_logger.level == logging.INFO
        assert "Invalid LOG_LEVEL 'LOUD'" in capsys.readouterr().err

    def test_reads_environment(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("LOG_FORMAT", "json")
        configure_logging()

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


class TestFormatters:

    def test_detailed_format(self):
        formatter = build_formatter("detailed")
        assert "%(funcName)s" in formatter._fmt

    def test_json_formatter(self):
        record = logging.LogRecord(
            name="clarify.errors.enricher",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="matched %s",
            args=("generic",),
            exc_info=None
        )
        record.extra_data = {"formula": "TOTAL"}

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "clarify.errors.enricher"
        assert data["message"] == "matched generic"
        assert data["extra"] == {"formula": "TOTAL"}
