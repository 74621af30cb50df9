# roilens/domain/services/i_roi_capture_service.py
from abc import ABC, abstractmethod

from roilens.domain.common.result import Result


class IRoiCaptureService(ABC):
    """Service that screenshots the current region."""

    @abstractmethod
    def capture(self) -> Result[str]:
        """
        Capture the current region of interest.

        Returns:
            Result containing a base64 JPEG payload. Fails with code
            NO_REGION_DEFINED when no region was selected, SOURCE_NOT_FOUND
            when the region's display cannot be captured, or CAPTURE_FAILED
        """
        pass
