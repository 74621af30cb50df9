# roilens/domain/models/queue_entry.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class QueueEntry:
    """One captured image payload plus its capture time."""
    data: str  # Base64 JPEG, never decoded by the queue
    timestamp: int  # Epoch milliseconds


@dataclass(frozen=True)
class QueuePushResult:
    """Outcome of adding an image to the queue."""
    count: int
    warning: Optional[str] = None


@dataclass(frozen=True)
class QueueInfo:
    """Snapshot of the queue for display."""
    count: int
    is_empty: bool
    oldest_timestamp: Optional[int] = None
