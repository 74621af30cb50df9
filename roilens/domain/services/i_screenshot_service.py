# roilens/domain/services/i_screenshot_service.py

"""
Screenshot service interface for grabbing whole displays.

Defines the contract for screenshot services in the application.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from roilens.domain.common.result import Result
from roilens.domain.models.display_model import CaptureSource


class IScreenshotService(ABC):
    """
    Interface for screenshot services.

    Defines methods for enumerating capture sources and encoding bitmaps.
    """

    @abstractmethod
    def get_sources(self, thumbnail_size: Tuple[int, int]) -> Result[List[CaptureSource]]:
        """
        Capture every screen.

        Args:
            thumbnail_size: Maximum (width, height) of each bitmap; larger
                captures are scaled down to fit, keeping the aspect ratio

        Returns:
            Result containing one CaptureSource per screen
        """
        pass

    @abstractmethod
    def to_jpeg_base64(self, image: Any, quality: int) -> Result[str]:
        """
        Encode an image as a base64 JPEG string.

        Args:
            image: Image to encode
            quality: JPEG quality, 1-100

        Returns:
            Result containing the base64 text on success
        """
        pass
