"""Focal-point-aware smart cropping."""
from __future__ import annotations

import logging
from typing import Optional, Union

from PIL import Image

from ..core.config import COMPARE_OUTPUT_WIDTH, DEFAULT_OUTPUT_WIDTH
from ..core.exceptions import InvalidDimensionsError
from ..core.models import CropMethod, CropResult
from ..export.image import image_to_buffer, render_crop
from .focal import estimate_focal_point, resolve_method
from .geometry import compute_center_crop, compute_focal_crop
from .presets import ASPECT_RATIOS, parse_aspect_ratio

logger = logging.getLogger(__name__)

Ratio = Union[float, str]


def _check_output_width(output_width: float):
    if output_width <= 0:
        raise InvalidDimensionsError(f"Output width must be positive, got {output_width}")


def smart_crop(
    image: Image.Image,
    target_ratio: Ratio,
    output_width: int = DEFAULT_OUTPUT_WIDTH,
    method: Union[str, CropMethod] = CropMethod.AUTO,
) -> CropResult:
    """Crop an image around its most interesting point.

    Args:
        image: Source image
        target_ratio: Desired width / height, as a number, 'W:H' or preset name
        output_width: Width of the output image
        method: Focal point method ('auto', 'face', 'edge', 'contrast')

    Returns:
        CropResult with the output image, the focal point used (None when
        the crop fell back to the center) and the source crop area

    Raises:
        InvalidDimensionsError: If output_width isn't positive
    """
    _check_output_width(output_width)
    ratio = parse_aspect_ratio(target_ratio)
    method = resolve_method(method)

    buffer = image_to_buffer(image)
    focal_point = estimate_focal_point(buffer, method)

    crop_area = compute_focal_crop(image.width, image.height, ratio, focal_point)

    output_height = output_width / ratio
    cropped = render_crop(image, crop_area, output_width, output_height)

    logger.debug(
        f"Smart crop ({method.value}) of {image.width}x{image.height} "
        f"to {cropped.width}x{cropped.height}, area {crop_area.as_tuple()}"
    )

    return CropResult(
        image=cropped,
        focal_point=focal_point,
        crop_area=crop_area,
        method=method,
    )


def center_crop(
    image: Image.Image,
    target_ratio: Ratio,
    output_width: Optional[int] = None,
) -> Image.Image:
    """Crop the middle of an image to an aspect ratio.

    Args:
        image: Source image
        target_ratio: Desired width / height, as a number, 'W:H' or preset name
        output_width: Width of the output image (default: crop width)

    Returns:
        Cropped and resized image
    """
    ratio = parse_aspect_ratio(target_ratio)
    crop_area = compute_center_crop(image.width, image.height, ratio)

    if output_width is None:
        final_width = crop_area.width
    else:
        _check_output_width(output_width)
        final_width = output_width
    return render_crop(image, crop_area, final_width, final_width / ratio)


def crop_to_preset(
    image: Image.Image,
    preset: str,
    output_width: int = DEFAULT_OUTPUT_WIDTH,
    method: Union[str, CropMethod] = CropMethod.AUTO,
) -> CropResult:
    """Smart crop an image to a named aspect ratio preset.

    Raises:
        ValueError: If preset is unknown
    """
    if preset not in ASPECT_RATIOS:
        raise ValueError(f"Unknown preset: {preset}")

    return smart_crop(image, ASPECT_RATIOS[preset], output_width, method)


def compare_methods(
    image: Image.Image,
    target_ratio: Ratio,
    output_width: int = COMPARE_OUTPUT_WIDTH,
    methods: list[str] = None,
) -> dict[str, CropResult]:
    """Smart crop the same image with several methods side by side.

    Args:
        image: Source image
        target_ratio: Desired width / height
        output_width: Width of each output image
        methods: Method names (default: face, edge and contrast)

    Returns:
        Dict mapping method name to its CropResult
    """
    if methods is None:
        methods = [CropMethod.FACE.value, CropMethod.EDGE.value, CropMethod.CONTRAST.value]

    return {
        method: smart_crop(image, target_ratio, output_width, method)
        for method in methods
    }
