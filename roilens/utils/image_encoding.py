# roilens/utils/image_encoding.py
"""
Image helpers shared by the capture path. PIL only, no Qt.
"""
import base64
import io
import math
from typing import Tuple

from PIL import Image

from roilens.domain.common.result import Result
from roilens.domain.common.errors import ErrorCode, ResourceError, ValidationError


def scaled_crop_box(x: float, y: float, width: float, height: float,
                    scale_factor: float) -> Tuple[int, int, int, int]:
    """
    Convert a logical rectangle to a PIL crop box in physical pixels.

    Returns:
        (left, upper, right, lower), each edge floored after scaling
    """
    left = math.floor(x * scale_factor)
    upper = math.floor(y * scale_factor)
    return (
        left,
        upper,
        left + math.floor(width * scale_factor),
        upper + math.floor(height * scale_factor)
    )


def clamp_crop_box(box: Tuple[int, int, int, int],
                   size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    """Clip a crop box to an image of the given (width, height)."""
    width, height = size
    left, upper, right, lower = box
    left = min(max(left, 0), width)
    upper = min(max(upper, 0), height)
    return left, upper, max(left, min(right, width)), max(upper, min(lower, height))


def encode_jpeg_base64(image: Image.Image, quality: int) -> Result[str]:
    """Lossy-encode a PIL image. JPEG has no alpha, so images are flattened to RGB."""
    if image is None or image.width == 0 or image.height == 0:
        return Result.fail(ValidationError(
            message="Cannot encode an empty image",
            code=ErrorCode.CAPTURE_FAILED
        ))
    try:
        buffer = io.BytesIO()
        image.convert("RGB").save(buffer, format="JPEG", quality=quality)
        return Result.ok(base64.b64encode(buffer.getvalue()).decode("ascii"))
    except Exception as e:
        return Result.fail(ResourceError(
            message=f"Failed to encode image: {e}",
            code=ErrorCode.CAPTURE_FAILED,
            inner_error=e
        ))
