import logging
import sys
from typing import Dict, Optional

from loadtrace.const import DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT
from .config import Config


class LoggingManager:
    """Manager for logging setup and logger retrieval."""

    @classmethod
    def setup_logging(cls, level: str = DEFAULT_LOG_LEVEL, library_log_levels: Optional[Dict[str, str]] = None) -> None:
        """Setup structured logging for the load tester.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            library_log_levels: Per-library levels; read from Config when omitted
        """
        # Convert string level to logging level
        numeric_level = getattr(logging, level.upper(), logging.INFO)

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(numeric_level)

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)
        root_logger.addHandler(console_handler)

        # Set levels for noisy libraries
        if library_log_levels is None:
            library_log_levels = Config().library_log_levels
        for logger_name, library_level in library_log_levels.items():
            logging.getLogger(logger_name).setLevel(getattr(logging, library_level.upper(), logging.WARNING))

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name, typically __name__

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)
