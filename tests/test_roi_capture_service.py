"""Tests for region capture with fabricated screen bitmaps."""

import base64
import io

import pytest
from PIL import Image, ImageDraw

from roilens.domain.common.errors import ErrorCategory, ErrorCode
from roilens.domain.common.result import Result
from roilens.domain.models.display_model import CaptureSource, DisplayInfo
from roilens.domain.models.region_model import Region
from roilens.domain.services.i_screenshot_service import IScreenshotService
from roilens.infrastructure.config.region_store import RegionStore
from roilens.infrastructure.platform.roi_capture_service import RoiCaptureService
from roilens.utils.image_encoding import clamp_crop_box, encode_jpeg_base64, scaled_crop_box

HIDPI_DISPLAY = DisplayInfo(id="E", x=1920, y=0, width=2560, height=1440, scale_factor=2.0)


class FakeScreenshotService(IScreenshotService):
    def __init__(self, sources):
        self.sources = sources
        self.requested_sizes = []

    def get_sources(self, thumbnail_size):
        self.requested_sizes.append(thumbnail_size)
        if isinstance(self.sources, Exception):
            return Result.fail(str(self.sources))
        return Result.ok(self.sources)

    def to_jpeg_base64(self, image, quality):
        return encode_jpeg_base64(image, quality)


def decode(payload):
    return Image.open(io.BytesIO(base64.b64decode(payload)))


def screen_with_marker(size, marker_box):
    """Gray screen with a red rectangle at marker_box (physical pixels)."""
    image = Image.new("RGB", size, (128, 128, 128))
    ImageDraw.Draw(image).rectangle(marker_box, fill=(255, 0, 0))
    return image


@pytest.fixture
def store(storage, logger):
    return RegionStore(storage, logger)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestScaledCropBox:
    def test_unscaled(self):
        assert scaled_crop_box(100, 200, 500, 300, 1) == (100, 200, 600, 500)

    def test_scaled(self):
        assert scaled_crop_box(100, 200, 500, 300, 2) == (200, 400, 1200, 1000)

    def test_fractional_scale_floors(self):
        assert scaled_crop_box(10, 10, 101, 101, 1.5) == (15, 15, 166, 166)


class TestClampCropBox:
    def test_inside_is_unchanged(self):
        assert clamp_crop_box((10, 20, 110, 220), (1920, 1080)) == (10, 20, 110, 220)

    def test_overhang_is_clipped(self):
        assert clamp_crop_box((1800, 900, 2100, 1200), (1920, 1080)) == (1800, 900, 1920, 1080)

    def test_negative_origin_is_clipped(self):
        assert clamp_crop_box((-50, -10, 100, 100), (1920, 1080)) == (0, 0, 100, 100)

    def test_fully_outside_collapses(self):
        left, upper, right, lower = clamp_crop_box((2000, 0, 2100, 100), (1920, 1080))
        assert right - left == 0


class TestEncodeJpeg:
    def test_rgba_is_flattened(self):
        result = encode_jpeg_base64(Image.new("RGBA", (10, 10), (0, 0, 255, 128)), 80)
        assert result.is_success
        assert decode(result.value).format == "JPEG"

    def test_empty_image(self):
        result = encode_jpeg_base64(Image.new("RGB", (0, 0)), 80)
        assert result.is_failure


# ---------------------------------------------------------------------------
# RoiCaptureService
# ---------------------------------------------------------------------------

class TestRoiCaptureService:
    def test_no_region(self, store, logger, primary_display, display_service_for):
        screenshots = FakeScreenshotService([])
        service = RoiCaptureService(store, display_service_for([primary_display]), screenshots, logger)

        result = service.capture()

        assert result.is_failure
        assert result.error.code == ErrorCode.NO_REGION_DEFINED
        assert result.error.category is ErrorCategory.CONFIGURATION
        assert result.error.message == "No ROI region defined. Select a region first."
        assert screenshots.requested_sizes == []

    def test_crops_region_on_primary_display(self, store, logger, primary_display, display_service_for):
        image = screen_with_marker((1920, 1080), (100, 200, 599, 499))
        screenshots = FakeScreenshotService([CaptureSource("D", "Screen 1", image)])
        store.set(Region(100, 200, 500, 300, "D"))
        service = RoiCaptureService(store, display_service_for([primary_display]), screenshots, logger)

        result = service.capture()

        assert result.is_success
        cropped = decode(result.value)
        assert cropped.size == (500, 300)
        r, g, b = cropped.getpixel((250, 150))
        assert r > 200 and g < 60 and b < 60
        assert screenshots.requested_sizes == [(3840, 2160)]

    def test_scales_crop_on_hidpi_display(self, store, logger, primary_display, display_service_for):
        # Logical (2020, 200, 500, 300) on a 2x display starting at x=1920
        image = screen_with_marker((5120, 2880), (200, 400, 1199, 999))
        sources = [
            CaptureSource("D", "Screen 1", Image.new("RGB", (1920, 1080))),
            CaptureSource("E", "Screen 2", image),
        ]
        store.set(Region(2020, 200, 500, 300, "E"))
        service = RoiCaptureService(store, display_service_for([primary_display, HIDPI_DISPLAY]),
                                    FakeScreenshotService(sources), logger)

        result = service.capture()

        cropped = decode(result.value)
        assert cropped.size == (1000, 600)
        r, g, b = cropped.getpixel((10, 10))
        assert r > 200 and g < 60 and b < 60

    def test_downscaled_grab_uses_bitmap_scale(self, store, logger, primary_display, display_service_for):
        # The 5120x2880 grab was thumbnailed to 3840x2160, so 1.5 bitmap pixels per logical pixel
        image = screen_with_marker((3840, 2160), (150, 300, 899, 749))
        store.set(Region(2020, 200, 500, 300, "E"))
        service = RoiCaptureService(store, display_service_for([primary_display, HIDPI_DISPLAY]),
                                    FakeScreenshotService([CaptureSource("E", "Screen 2", image)]), logger)

        cropped = decode(service.capture().value)

        assert cropped.size == (750, 450)
        r, g, b = cropped.getpixel((375, 225))
        assert r > 200 and g < 60 and b < 60

    def test_region_past_display_edge_is_clipped(self, store, logger, primary_display, display_service_for):
        image = Image.new("RGB", (1920, 1080), (255, 255, 255))
        store.set(Region(1800, 900, 300, 300, "D"))
        service = RoiCaptureService(store, display_service_for([primary_display]),
                                    FakeScreenshotService([CaptureSource("D", "Screen 1", image)]), logger)

        cropped = decode(service.capture().value)

        assert cropped.size == (120, 180)
        r, g, b = cropped.getpixel((119, 179))
        assert min(r, g, b) > 200
        assert "Crop box clipped to display bitmap" in logger.messages("debug")

    def test_source_not_found(self, store, logger, primary_display, display_service_for):
        screenshots = FakeScreenshotService([CaptureSource("other", "Screen 9", Image.new("RGB", (10, 10)))])
        store.set(Region(100, 200, 500, 300, "D"))
        service = RoiCaptureService(store, display_service_for([primary_display]), screenshots, logger)

        result = service.capture()

        assert result.error.code == ErrorCode.SOURCE_NOT_FOUND
        assert result.error.message == "Could not find display source"
        assert result.error.category is ErrorCategory.RESOURCE

    def test_no_displays(self, store, logger, display_service_for):
        store.set(Region(100, 200, 500, 300, "D"))
        service = RoiCaptureService(store, display_service_for([]), FakeScreenshotService([]), logger)

        assert service.capture().error.code == ErrorCode.SOURCE_NOT_FOUND

    def test_source_failure_passes_through(self, store, logger, primary_display, display_service_for):
        store.set(Region(100, 200, 500, 300, "D"))
        service = RoiCaptureService(store, display_service_for([primary_display]),
                                    FakeScreenshotService(RuntimeError("grab failed")), logger)

        result = service.capture()

        assert result.is_failure
        assert "grab failed" in result.error.message

    def test_unexpected_error_is_capture_failure(self, store, logger, primary_display, display_service_for):
        broken = CaptureSource("D", "Screen 1", object())
        store.set(Region(100, 200, 500, 300, "D"))
        service = RoiCaptureService(store, display_service_for([primary_display]),
                                    FakeScreenshotService([broken]), logger)

        result = service.capture()

        assert result.error.code == ErrorCode.CAPTURE_FAILED

    def test_uses_configured_limits(self, store, logger, primary_display, display_service_for):
        screenshots = FakeScreenshotService([CaptureSource("D", "Screen 1", Image.new("RGB", (1920, 1080)))])
        store.set(Region(0, 0, 100, 100, "D"))
        service = RoiCaptureService(store, display_service_for([primary_display]), screenshots, logger,
                                    thumbnail_size=(1280, 720), jpeg_quality=50)

        assert service.capture().is_success
        assert screenshots.requested_sizes == [(1280, 720)]
