# roilens/infrastructure/platform/screenshot_service.py
"""
Qt-native implementation of the screenshot service using QScreen.
"""
import io
from typing import List, Optional, Tuple

from PIL import Image

from PySide6.QtCore import QByteArray, QBuffer
from PySide6.QtGui import QGuiApplication, QPixmap

from roilens.domain.services.i_screenshot_service import IScreenshotService
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.display_model import CaptureSource
from roilens.domain.common.result import Result
from roilens.domain.common.errors import ErrorCode, ResourceError
from roilens.infrastructure.platform.qt_display_service import screen_id
from roilens.utils.image_encoding import encode_jpeg_base64


class QtScreenshotService(IScreenshotService):
    """
    Qt-native implementation of the screenshot service using QScreen.

    Screens are grabbed with Qt and handed on as PIL images, which do the
    cropping and JPEG encoding.
    """

    def __init__(self, logger: ILoggerService):
        """
        Initialize the screenshot service.

        Args:
            logger: Logger service for logging
        """
        self.logger = logger

    def get_sources(self, thumbnail_size: Tuple[int, int]) -> Result[List[CaptureSource]]:
        """
        Grab every screen at full resolution, scaled down to fit thumbnail_size.

        Args:
            thumbnail_size: Maximum (width, height) of each bitmap

        Returns:
            Result containing one CaptureSource per screen
        """
        try:
            sources = []
            for index, screen in enumerate(QGuiApplication.screens()):
                pixmap = screen.grabWindow(0)
                if pixmap.isNull():
                    self.logger.warning(f"Screen grab returned an empty pixmap for {screen.name()}")
                    continue

                image = self._qpixmap_to_pil(pixmap)
                if image is None:
                    continue
                if image.width > thumbnail_size[0] or image.height > thumbnail_size[1]:
                    image.thumbnail(thumbnail_size)

                sources.append(CaptureSource(
                    display_id=screen_id(screen, index),
                    name=f"Screen {index + 1}",
                    image=image
                ))

            self.logger.debug(f"Captured {len(sources)} screen source(s)")
            return Result.ok(sources)
        except Exception as e:
            return Result.fail(ResourceError(
                message=f"Failed to capture screens: {e}",
                code=ErrorCode.CAPTURE_FAILED,
                inner_error=e
            ))

    def _qpixmap_to_pil(self, pixmap: QPixmap) -> Optional[Image.Image]:
        """Convert QPixmap to PIL Image using an intermediate buffer."""
        try:
            byte_array = QByteArray()
            buffer = QBuffer(byte_array)
            buffer.open(QBuffer.WriteOnly)
            pixmap.save(buffer, "PNG")
            buffer.close()

            image = Image.open(io.BytesIO(byte_array.data()))
            image.load()
            return image
        except Exception as e:
            self.logger.error(f"Error converting QPixmap to PIL Image: {e}")
            return None

    def to_jpeg_base64(self, image: Image.Image, quality: int) -> Result[str]:
        """
        Encode a PIL Image as base64 JPEG text.

        Args:
            image: PIL Image to encode
            quality: JPEG quality, 1-100

        Returns:
            Result containing the base64 text on success
        """
        return encode_jpeg_base64(image, quality)


