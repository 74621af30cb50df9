#roilens/domain/services/i_logger_service.py
"""
Logger service interface for application-wide logging.

Services receive an ILoggerService through their constructor instead of
creating module-level loggers.
"""
from abc import ABC, abstractmethod


class ILoggerService(ABC):
    """
    Interface for logging services.

    Every method accepts keyword arguments that are appended to the message
    as key=value context.
    """

    @abstractmethod
    def debug(self, message: str, **kwargs) -> None:
        """Log a debug message."""
        pass

    @abstractmethod
    def info(self, message: str, **kwargs) -> None:
        """Log an info message."""
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs) -> None:
        """Log a warning message."""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs) -> None:
        """Log an error message."""
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs) -> None:
        """Log a critical message."""
        pass

    @abstractmethod
    def set_level(self, level: int) -> None:
        """
        Set the minimum log level to display.

        Args:
            level: Minimum log level (e.g., logging.INFO, logging.DEBUG)
        """
        pass
