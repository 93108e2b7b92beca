"""
Tests for chetutils.logging_config.

These tests verify:
1. Handlers are installed on the package logger
2. Repeated setup does not stack handlers
3. Optional file output
"""

import logging

import pytest

from chetutils.logging_config import setup_logging


@pytest.fixture(autouse=True)
def package_logger():
    logger = logging.getLogger("chetutils")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Test setup_logging()."""

    def test_console_handler(self, package_logger):
        """One stream handler at the requested level."""
        setup_logging(logging.DEBUG)

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], logging.StreamHandler)

    def test_repeated_setup(self, package_logger):
        """Calling twice leaves a single handler."""
        setup_logging()
        setup_logging(logging.WARNING)

        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.WARNING

    def test_log_file(self, package_logger, tmp_path):
        """Messages also go to the log file."""
        log_file = tmp_path / "chetutils.log"

        setup_logging(logging.INFO, str(log_file))
        logging.getLogger("chetutils.grouping").info("分组完成")
        for handler in package_logger.handlers:
            handler.flush()

        assert len(package_logger.handlers) == 2
        assert "分组完成" in log_file.read_text(encoding="utf-8")
