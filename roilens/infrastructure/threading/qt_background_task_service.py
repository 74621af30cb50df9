# roilens/infrastructure/threading/qt_background_task_service.py
"""
Qt implementation of the background task service.

Workers run on a QThread so model queries do not freeze the window. Results
travel back through queued signals to a relay object that lives on the
thread which started the task.
"""
import traceback
from typing import Any, Callable, Dict, List, Optional, TypeVar

from PySide6.QtCore import QObject, QThread, Signal, Slot, QMutex, QMutexLocker

from roilens.domain.services.i_background_task_service import IBackgroundTaskService, Worker
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.common.result import Result

T = TypeVar('T')


class WorkerSignals(QObject):
    """
    Defines the signals available from a running worker thread.

    Signals:
        completed: Signal emitted with the result when the worker completes successfully
        error: Signal emitted with error information when the worker raises
    """
    completed = Signal(object)
    error = Signal(str)


class WorkerWrapper(QObject):
    """Runs a domain Worker inside a QThread and reports through signals."""

    def __init__(self, worker: Worker[T], logger: ILoggerService, task_id: str):
        super().__init__()
        self.worker = worker
        self.logger = logger
        self.task_id = task_id
        self.signals = WorkerSignals()

    @Slot()
    def run(self):
        """
        Execute the worker's task in the background thread.
        This method is called automatically when the thread starts.
        """
        try:
            self.logger.debug(f"Worker for task '{self.task_id}' starting execution")
            result = self.worker.execute()
        except Exception as e:
            error_message = f"Unhandled error in worker: {e}"
            self.logger.error(error_message)
            self.logger.debug(traceback.format_exc())
            self.signals.error.emit(error_message)
            return

        self.signals.completed.emit(result)


class ResultRelay(QObject):
    """Hands worker results to plain callbacks on the thread it was created in."""

    def __init__(self, on_completed: Callable[[Any], None],
                 on_error: Optional[Callable[[str], None]],
                 on_done: Callable[[], None]):
        super().__init__()
        self._on_completed = on_completed
        self._on_error = on_error
        self._on_done = on_done

    @Slot(object)
    def deliver(self, result):
        try:
            self._on_completed(result)
        finally:
            self._on_done()

    @Slot(str)
    def fail(self, message):
        try:
            if self._on_error:
                self._on_error(message)
        finally:
            self._on_done()


class TaskInfo:
    """References that must stay alive while a task runs."""

    def __init__(self, task_id: str, thread: QThread, wrapper: WorkerWrapper,
                 relay: ResultRelay, worker: Worker):
        self.task_id = task_id
        self.thread = thread
        self.wrapper = wrapper
        self.relay = relay
        self.worker = worker

    def disconnect_signals(self):
        """Safely disconnect the worker signals."""
        for signal_name in ['completed', 'error']:
            try:
                getattr(self.wrapper.signals, signal_name).disconnect()
            except (TypeError, RuntimeError):
                pass  # Not connected


class QtBackgroundTaskService(IBackgroundTaskService):
    """
    Qt implementation of the background task service.

    Uses Qt's QThread and signal/slot mechanism to safely execute
    tasks in background threads without blocking the UI.
    """

    def __init__(self, logger: ILoggerService):
        """
        Initialize the Qt task service.

        Args:
            logger: Logger service for error reporting
        """
        self.logger = logger
        self.tasks: Dict[str, TaskInfo] = {}
        self.mutex = QMutex()

    def execute_ui_task(self, task_id: str, worker: Worker[T],
                        ui_callback: Callable[[T], None]) -> Result[bool]:
        locker = QMutexLocker(self.mutex)

        try:
            if task_id in self.tasks:
                self.logger.warning(f"Task '{task_id}' is already running")
                return Result.fail(f"Task '{task_id}' is already running")

            self.logger.debug(f"Starting task '{task_id}'")

            thread = QThread()
            wrapper = WorkerWrapper(worker, self.logger, task_id)
            wrapper.moveToThread(thread)

            # Created here, so its slots run on the caller's thread
            relay = ResultRelay(ui_callback, worker.on_error_callback,
                                lambda: self._cleanup_task(task_id))

            thread.started.connect(wrapper.run)
            wrapper.signals.completed.connect(relay.deliver)
            wrapper.signals.error.connect(relay.fail)

            self.tasks[task_id] = TaskInfo(task_id, thread, wrapper, relay, worker)
            thread.start()

            self.logger.debug(f"Task '{task_id}' started successfully")
            return Result.ok(True)
        except Exception as e:
            error_message = f"Error starting task '{task_id}': {e}"
            self.logger.error(error_message)
            self.logger.debug(traceback.format_exc())
            return Result.fail(error_message)

    def is_task_running(self, task_id: str) -> bool:
        locker = QMutexLocker(self.mutex)
        return task_id in self.tasks

    def get_running_tasks(self) -> List[str]:
        locker = QMutexLocker(self.mutex)
        return list(self.tasks.keys())

    def cancel_all_tasks(self) -> None:
        """Cancel all running background tasks."""
        for task_id in self.get_running_tasks():
            self.logger.debug(f"Cancelling task '{task_id}'")
            self._cleanup_task(task_id, cancel=True)

    def _cleanup_task(self, task_id: str, cancel: bool = False) -> None:
        """
        Stop the thread of a finished or cancelled task and forget it.
        """
        locker = QMutexLocker(self.mutex)
        try:
            task_info = self.tasks.pop(task_id, None)
            if task_info is None:
                return

            if cancel:
                task_info.worker.cancel()
            task_info.disconnect_signals()
            task_info.thread.quit()

            # A blocking network call cannot be interrupted, so wait briefly
            for attempt in range(5):
                if task_info.thread.wait(250):
                    break

            if not task_info.thread.isFinished():
                self.logger.warning(f"Forcing termination of task '{task_id}'")
                task_info.thread.terminate()
                task_info.thread.wait(500)

            self.logger.debug(f"Task '{task_id}' resources cleaned up")
        except Exception as e:
            self.logger.error(f"Error cleaning up task '{task_id}': {e}")
