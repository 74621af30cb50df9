#roilens/domain/services/i_background_task_service.py
"""
Background task service interface.

Long operations such as model queries run as Workers off the UI thread.
"""
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar
import threading

from roilens.domain.common.result import Result

T = TypeVar('T')


class Worker(ABC, Generic[T]):
    """
    Base class for work executed by the background task service.

    execute() runs on a background thread; its return value is handed to
    the completion callback on the thread that started the task.
    """

    def __init__(self):
        self._cancelled = threading.Event()
        self.on_error_callback: Optional[Callable[[str], None]] = None

    @property
    def cancel_requested(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled.is_set()

    def set_on_error(self, callback: Callable[[str], None]) -> None:
        """Set callback for when the worker raises instead of returning."""
        self.on_error_callback = callback

    def report_error(self, error: str) -> None:
        """Report that the worker has encountered an error."""
        if self.on_error_callback:
            self.on_error_callback(error)

    def cancel(self) -> None:
        """Request cancellation of the worker's task."""
        self._cancelled.set()

    @abstractmethod
    def execute(self) -> T:
        """
        Execute the worker's task.

        Returns:
            The result of the worker's execution
        """
        pass


class IBackgroundTaskService(ABC):
    """Runs workers in background threads and reports results back."""

    @abstractmethod
    def execute_ui_task(self, task_id: str, worker: Worker[T],
                        ui_callback: Callable[[T], None]) -> Result[bool]:
        """
        Execute a task with a UI callback for the result.

        The task is removed once its callback (or error callback) has run.

        Args:
            task_id: Unique identifier for the task
            worker: Worker to execute
            ui_callback: Callback to be executed on the UI thread with the result

        Returns:
            Result indicating whether the task was started
        """
        pass

    @abstractmethod
    def is_task_running(self, task_id: str) -> bool:
        """
        Check if a task is currently running.

        Args:
            task_id: Identifier of the task to check

        Returns:
            True if the task is running, False otherwise
        """
        pass

    @abstractmethod
    def get_running_tasks(self) -> List[str]:
        """Get the identifiers of all running tasks."""
        pass

    @abstractmethod
    def cancel_all_tasks(self) -> None:
        """Cancel all running background tasks."""
        pass
