"""Unit tests for logging configuration."""

import logging

import pytest

from doccompare.logging_utils import PACKAGE_LOGGER_NAME, configure_logging


def _stream_handlers(logger):
    return [h for h in logger.handlers if type(h) is logging.StreamHandler]


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_sets_level_from_name(self):
        """Test string level names."""
        logger = configure_logging("debug")
        assert logger.name == PACKAGE_LOGGER_NAME
        assert logger.level == logging.DEBUG

    def test_unknown_level_name_defaults_to_info(self):
        """Test the fallback level."""
        assert configure_logging("chatty").level == logging.INFO

    def test_root_logger_untouched(self):
        """Test that only the package logger is configured."""
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(logging.WARNING)
        assert logging.getLogger().handlers == root_handlers

    def test_repeated_calls_do_not_stack_handlers(self):
        """Test that reconfiguring replaces the console handler."""
        configure_logging(logging.INFO)
        logger = configure_logging(logging.INFO)
        assert len(_stream_handlers(logger)) == 1

    def test_trace_format(self):
        """Test that trace mode includes the logger name."""
        logger = configure_logging(logging.DEBUG, trace_mode=True)
        formatter = _stream_handlers(logger)[0].formatter
        assert "%(name)s" in formatter._fmt

    def test_log_file(self, tmp_path):
        """Test that messages are also written to the log file."""
        log_file = tmp_path / "doccompare.log"
        logger = configure_logging(logging.INFO, log_file=str(log_file))

        logging.getLogger("doccompare.comparator").info("comparison finished")
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "comparison finished" in text
        assert "Logging to file" in text

    def test_unwritable_log_file(self, tmp_path):
        """Test that a bad log path does not raise."""
        logger = configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "x.log"))
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
