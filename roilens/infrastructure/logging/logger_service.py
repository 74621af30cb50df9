#roilens/infrastructure/logging/logger_service.py
"""
Implementation of the logger service using Python's built-in logging module.
"""
import logging
import sys
import os
from datetime import datetime
from typing import Any, Dict, Union

from roilens.domain.services.i_logger_service import ILoggerService

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_log_level(level: Union[int, str], default: int = logging.INFO) -> int:
    """Turn a config value such as "DEBUG" or 10 into a logging level."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


class ConsoleLoggerService(ILoggerService):
    """
    Implementation of the logger service that logs to console.

    Uses Python's built-in logging module to handle log messages.
    """

    def __init__(self, level: int = logging.INFO, name: str = "ROILens"):
        """
        Initialize the logger service.

        Args:
            level: Initial log level (default: INFO)
            name: Logger name
        """
        self.logger = logging.getLogger(name)
        self.set_level(level)

        # Don't add handlers if they already exist
        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(console_handler)

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(self._with_context(message, kwargs))

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(self._with_context(message, kwargs))

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(self._with_context(message, kwargs))

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(self._with_context(message, kwargs))

    def critical(self, message: str, **kwargs) -> None:
        self.logger.critical(self._with_context(message, kwargs))

    def set_level(self, level: int) -> None:
        """
        Set the minimum log level on the logger and its handlers.

        Args:
            level: Minimum log level (e.g., logging.INFO, logging.DEBUG)
        """
        self.logger.setLevel(level)
        for handler in self.logger.handlers:
            handler.setLevel(level)

    def _with_context(self, message: str, extra: Dict[str, Any]) -> str:
        """
        Append keyword context to a message as [key=value ...].

        Args:
            message: The message to log
            extra: Dictionary of extra context information

        Returns:
            The message, with context appended when there is any
        """
        if not extra:
            return message
        formatted = " ".join(f"{key}={value}" for key, value in extra.items())
        return f"{message} [{formatted}]"


class FileLoggerService(ConsoleLoggerService):
    """
    Extension of ConsoleLoggerService that also logs to a dated file.
    """

    def __init__(self, level: int = logging.INFO, name: str = "ROILens",
                 log_dir: str = "logs"):
        """
        Initialize the file logger service.

        Args:
            level: Initial log level (default: INFO)
            name: Logger name
            log_dir: Directory to store log files
        """
        super().__init__(level, name)

        os.makedirs(log_dir, exist_ok=True)

        current_date = datetime.now().strftime("%Y-%m-%d")
        self.log_file = os.path.join(log_dir, f"{name}_{current_date}.log")

        # Reuse an existing handler for the same file
        for handler in self.logger.handlers:
            if isinstance(handler, logging.FileHandler) and \
                    handler.baseFilename == os.path.abspath(self.log_file):
                return

        file_handler = logging.FileHandler(self.log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(file_handler)
