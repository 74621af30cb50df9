# roilens/infrastructure/queue/image_queue_service.py
"""
In-memory image queue for multi-image queries.

Entries stay until an explicit clear, an overflow, or the end of the process.
"""
import time
from typing import Callable, List, Optional

from roilens.domain.services.i_image_queue_service import (
    IImageQueueService, MAX_QUEUE_SIZE, WARNING_THRESHOLD
)
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.queue_entry import QueueEntry, QueueInfo, QueuePushResult
from roilens.domain.common.errors import ErrorCode, InvalidInputException


def _now_ms() -> int:
    return int(time.time() * 1000)


class ImageQueueService(IImageQueueService):
    """
    Ordered, bounded queue of base64 image payloads.

    When the queue is full the next push empties it first, so a new batch
    starts instead of sliding a window over the old one.
    """

    def __init__(self, logger: ILoggerService, clock: Callable[[], int] = _now_ms,
                 max_size: int = MAX_QUEUE_SIZE, warning_threshold: int = WARNING_THRESHOLD):
        """
        Initialize the queue.

        Args:
            logger: Logger service
            clock: Returns the current time in epoch milliseconds
            max_size: Capacity; reaching it triggers an auto-clear on the next push
            warning_threshold: Count from which pushes return a warning
        """
        self.logger = logger
        self.clock = clock
        self.max_size = max_size
        self.warning_threshold = warning_threshold
        self._entries: List[QueueEntry] = []

    def push(self, payload: str) -> QueuePushResult:
        if not payload or not isinstance(payload, str):
            raise InvalidInputException(
                "Invalid image data",
                code=ErrorCode.INVALID_IMAGE_DATA,
                details={"type": type(payload).__name__}
            )

        if len(self._entries) >= self.max_size:
            self._entries = []
            self.logger.info("Image queue auto-cleared (max capacity reached)", max_size=self.max_size)

        self._entries.append(QueueEntry(data=payload, timestamp=self.clock()))

        count = len(self._entries)
        warning = None
        if self.warning_threshold <= count < self.max_size:
            warning = f"Queue has {count} images. Will auto-clear at {self.max_size}."

        self.logger.debug("Image queued", count=count)
        return QueuePushResult(count=count, warning=warning)

    def drain_view(self) -> List[str]:
        return [entry.data for entry in self._entries]

    def clear(self) -> None:
        previous_count = len(self._entries)
        self._entries = []
        self.logger.info(f"Image queue cleared (was {previous_count} images)")

    def size(self) -> int:
        return len(self._entries)

    def info(self) -> QueueInfo:
        return QueueInfo(
            count=len(self._entries),
            is_empty=not self._entries,
            oldest_timestamp=self._entries[0].timestamp if self._entries else None
        )

    def pop_oldest(self) -> Optional[str]:
        if not self._entries:
            return None
        return self._entries.pop(0).data
