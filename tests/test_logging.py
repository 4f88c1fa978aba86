"""Tests for logging helpers."""

import logging

from rich.logging import RichHandler

from minimax_mcp.logging import configure_logging, get_logger, mask_api_key


class TestMaskApiKey:
    def test_long_key(self):
        assert mask_api_key("abcd1234567890wxyz") == "abcd****wxyz"

    def test_short_key(self):
        assert mask_api_key("abc") == "****"

    def test_missing_key(self):
        assert mask_api_key("") == "not provided"
        assert mask_api_key(None) == "not provided"


class TestConfigureLogging:
    def test_single_rich_handler(self):
        logger = logging.getLogger("minimax_mcp.test_configure")

        configure_logging("DEBUG", logger)
        configure_logging("WARNING", logger)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.WARNING

    def test_namespaced_logger(self):
        assert get_logger("dispatcher").name == "minimax_mcp.dispatcher"
