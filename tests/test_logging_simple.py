"""Simple tests for logging utilities."""

import logging
import tempfile
from pathlib import Path

from news_retriever.utils.logging import setup_logging, get_logger


class TestLoggingUtilities:
    """Test logging configuration utilities."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        logger = setup_logging()

        assert logger is not None
        assert logger.name == "news_retriever"
        assert logger.level == logging.WARNING
        assert logger.propagate is False

    def test_setup_logging_debug_level(self) -> None:
        """Test logging setup with DEBUG level."""
        logger = setup_logging(level="DEBUG")

        assert logger.level == logging.DEBUG

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test that repeated setup does not stack handlers."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_setup_logging_with_file(self) -> None:
        """Test logging setup with file output."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "logs" / "test.log"

            logger = setup_logging(level="INFO", log_file=str(log_file))
            get_logger("test").info("hello")

            assert log_file.exists()
            assert "hello" in log_file.read_text()

            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                handler.close()

    def test_get_logger(self) -> None:
        """Test getting a module-specific logger."""
        logger = get_logger("test_module")

        assert logger.name == "news_retriever.test_module"
        assert isinstance(logger, logging.Logger)

    def test_module_level_loggers_exist(self) -> None:
        """Test that module-level logger instances are created."""
        from news_retriever.utils.logging import (
            main_logger,
            news_logger,
            preferences_logger,
            config_logger,
        )

        assert main_logger.name == "news_retriever.main"
        assert news_logger.name == "news_retriever.news"
        assert preferences_logger.name == "news_retriever.preferences"
        assert config_logger.name == "news_retriever.config"
