"""Tests for logging setup."""

import io
import logging
import sys
from json_query_transformer.utils.log_setup import setup_logging, PACKAGE_LOGGER


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_logs_to_given_stream(self):
        """Test that records are formatted onto the given stream."""
        stream = io.StringIO()
        logger = setup_logging("debug", stream)

        logging.getLogger("json_query_transformer.transformer").debug("compiling")

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert "DEBUG - json_query_transformer.transformer - compiling" in stream.getvalue()

    def test_defaults_to_current_stderr(self, monkeypatch):
        """Test that the handler binds to sys.stderr at setup time."""
        fake_stderr = io.StringIO()
        monkeypatch.setattr(sys, "stderr", fake_stderr)

        logger = setup_logging(logging.WARNING)
        logging.getLogger("json_query_transformer.cli").warning("careful")

        assert logger.handlers[0].stream is fake_stderr
        assert "careful" in fake_stderr.getvalue()

    def test_repeated_setup_replaces_handler(self):
        """Test that only the latest handler stays installed."""
        first, second = io.StringIO(), io.StringIO()
        setup_logging(logging.INFO, first)
        logger = setup_logging(logging.INFO, second)

        logging.getLogger(PACKAGE_LOGGER).info("hello")

        assert len(logger.handlers) == 1
        assert first.getvalue() == ""
        assert "hello" in second.getvalue()

    def test_set_stream_is_honoured(self):
        """Test that the handler's stream can be swapped."""
        logger = setup_logging(logging.INFO, io.StringIO())
        replacement = io.StringIO()

        logger.handlers[0].setStream(replacement)
        logger.info("moved")

        assert "moved" in replacement.getvalue()

    def test_unknown_level_name_falls_back_to_info(self):
        """Test that an unknown level name yields INFO."""
        logger = setup_logging("chatty", io.StringIO())

        assert logger.level == logging.INFO
