# roilens/infrastructure/platform/roi_capture_service.py
"""
Captures the saved region of interest as a base64 JPEG payload.
"""
from typing import Tuple

from roilens.domain.services.i_roi_capture_service import IRoiCaptureService
from roilens.domain.services.i_region_store import IRegionStore
from roilens.domain.services.i_display_service import IDisplayService
from roilens.domain.services.i_screenshot_service import IScreenshotService
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.common.result import Result
from roilens.domain.common.errors import ConfigurationError, ErrorCode, ResourceError
from roilens.utils.image_encoding import clamp_crop_box, scaled_crop_box

DEFAULT_THUMBNAIL_SIZE = (3840, 2160)
DEFAULT_JPEG_QUALITY = 80


class RoiCaptureService(IRoiCaptureService):
    """
    Crops the region's display out of a full-screen capture.

    Region coordinates are logical pixels. The crop is scaled by the ratio of
    bitmap width to display width, which is the scale factor for a full-size
    grab and smaller when the grab was downscaled to the thumbnail limit.
    """

    def __init__(self, region_store: IRegionStore, display_service: IDisplayService,
                 screenshot_service: IScreenshotService, logger: ILoggerService,
                 thumbnail_size: Tuple[int, int] = DEFAULT_THUMBNAIL_SIZE,
                 jpeg_quality: int = DEFAULT_JPEG_QUALITY):
        self.region_store = region_store
        self.display_service = display_service
        self.screenshot_service = screenshot_service
        self.logger = logger
        self.thumbnail_size = thumbnail_size
        self.jpeg_quality = jpeg_quality

    def capture(self) -> Result[str]:
        region = self.region_store.get()
        if region is None:
            return Result.fail(ConfigurationError(
                message="No ROI region defined. Select a region first.",
                code=ErrorCode.NO_REGION_DEFINED
            ))

        try:
            sources_result = self.screenshot_service.get_sources(self.thumbnail_size)
            if sources_result.is_failure:
                return sources_result

            display = self.display_service.get_display_matching(region)
            source = None
            if display is not None:
                source = next((s for s in sources_result.value if s.display_id == display.id), None)
            if source is None:
                self.logger.warning("No capture source for region display",
                                    display=display.id if display else None)
                return Result.fail(ResourceError(
                    message="Could not find display source",
                    code=ErrorCode.SOURCE_NOT_FOUND,
                    details={"display_id": display.id if display else None}
                ))

            crop_box = scaled_crop_box(
                region.x - display.x,
                region.y - display.y,
                region.width,
                region.height,
                self._bitmap_scale(source.image, display)
            )
            # Regions may hang off the display edge; PIL would pad those with black
            clipped_box = clamp_crop_box(crop_box, source.image.size)
            if clipped_box != crop_box:
                self.logger.debug("Crop box clipped to display bitmap", box=crop_box, clipped=clipped_box)
            cropped = source.image.crop(clipped_box)
            self.logger.debug("Cropped region", box=clipped_box, display=display.id)

            return self.screenshot_service.to_jpeg_base64(cropped, self.jpeg_quality)
        except Exception as e:
            self.logger.error(f"ROI capture error: {e}")
            return Result.fail(ResourceError(
                message=str(e),
                code=ErrorCode.CAPTURE_FAILED,
                inner_error=e
            ))

    @staticmethod
    def _bitmap_scale(image, display) -> float:
        if display.width:
            return image.width / display.width
        return display.scale_factor or 1
