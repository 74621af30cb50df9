# roilens/application/capture_session.py
from dataclasses import dataclass

from roilens.domain.services.i_region_store import IRegionStore
from roilens.domain.services.i_image_queue_service import IImageQueueService


@dataclass
class CaptureSession:
    """
    The one region store and one image queue of a running application.

    Created at startup; reset() empties the queue and forces the region to be
    re-read from storage, without deleting the saved region.
    """
    region_store: IRegionStore
    image_queue: IImageQueueService

    def reset(self) -> None:
        self.image_queue.clear()
        self.region_store.invalidate_cache()
