# roilens/domain/services/i_image_queue_service.py
"""
Image queue interface.

The queue buffers encoded captures between capture and dispatch. It is
bounded; reaching capacity empties it before the next image goes in.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from roilens.domain.models.queue_entry import QueueInfo, QueuePushResult

MAX_QUEUE_SIZE = 20
WARNING_THRESHOLD = 10


class IImageQueueService(ABC):
    """Interface for the ordered, bounded buffer of captured images."""

    @abstractmethod
    def push(self, payload: str) -> QueuePushResult:
        """
        Append an image payload.

        Args:
            payload: Base64 encoded image

        Returns:
            The new count, with a warning once the count reaches the threshold

        Raises:
            InvalidInputException: If the payload is missing, empty, or not a string
        """
        pass

    @abstractmethod
    def drain_view(self) -> List[str]:
        """Get all payloads, oldest first, without removing them."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Number of queued images."""
        pass

    @abstractmethod
    def info(self) -> QueueInfo:
        """Count, emptiness and the oldest capture time."""
        pass

    @abstractmethod
    def pop_oldest(self) -> Optional[str]:
        """Remove and return the oldest payload, or None when empty."""
        pass
