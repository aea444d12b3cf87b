"""Crop rectangle geometry."""
from __future__ import annotations

import logging
import math
from typing import Optional

from ..core.exceptions import InvalidAspectRatioError, InvalidDimensionsError
from ..core.models import FocalPoint, Rectangle

logger = logging.getLogger(__name__)


def _check_inputs(source_width: float, source_height: float, target_ratio: float):
    """Fail fast on sizes and ratios the crop math can't handle."""
    if not (math.isfinite(source_width) and math.isfinite(source_height)) \
            or source_width <= 0 or source_height <= 0:
        raise InvalidDimensionsError(
            f"Source dimensions must be positive, got {source_width}x{source_height}"
        )
    if not math.isfinite(target_ratio) or target_ratio <= 0:
        raise InvalidAspectRatioError(
            f"Target aspect ratio must be positive, got {target_ratio}"
        )


def crop_size(
    source_width: float,
    source_height: float,
    target_ratio: float,
) -> tuple[float, float]:
    """Largest (width, height) with the target ratio that fits the source.

    Args:
        source_width: Source image width
        source_height: Source image height
        target_ratio: Desired width / height

    Returns:
        Tuple of (crop_width, crop_height)
    """
    _check_inputs(source_width, source_height, target_ratio)

    if source_width / source_height > target_ratio:
        # Source is wider - crop sides
        crop_height = source_height
        crop_width = crop_height * target_ratio
    else:
        # Source is taller or the same - crop top/bottom
        crop_width = source_width
        crop_height = crop_width / target_ratio

    # Rounding can push a side past the source by a hair
    return min(crop_width, source_width), min(crop_height, source_height)


def compute_center_crop(
    source_width: float,
    source_height: float,
    target_ratio: float,
) -> Rectangle:
    """Crop box with the target ratio, centered on the source.

    Args:
        source_width: Source image width
        source_height: Source image height
        target_ratio: Desired width / height

    Returns:
        Rectangle for the crop

    Raises:
        InvalidDimensionsError: If a source dimension isn't positive
        InvalidAspectRatioError: If the ratio isn't positive
    """
    crop_width, crop_height = crop_size(source_width, source_height, target_ratio)

    return Rectangle(
        x=(source_width - crop_width) / 2,
        y=(source_height - crop_height) / 2,
        width=crop_width,
        height=crop_height,
    )


def compute_focal_crop(
    source_width: float,
    source_height: float,
    target_ratio: float,
    focal_point: Optional[FocalPoint] = None,
) -> Rectangle:
    """Crop box with the target ratio, centered on a focal point.

    The box is shifted back inside the source when the focal point sits
    near an edge, so it is then no longer centered on the point.
    Without a focal point this is the center crop.

    Args:
        source_width: Source image width
        source_height: Source image height
        target_ratio: Desired width / height
        focal_point: Point to center on (optional)

    Returns:
        Rectangle for the crop
    """
    if focal_point is None:
        return compute_center_crop(source_width, source_height, target_ratio)

    crop_width, crop_height = crop_size(source_width, source_height, target_ratio)

    # Clamp to image bounds
    crop_x = max(0, min(source_width - crop_width, focal_point.x - crop_width / 2))
    crop_y = max(0, min(source_height - crop_height, focal_point.y - crop_height / 2))

    logger.debug(
        f"Focal crop at ({crop_x:.1f}, {crop_y:.1f}) "
        f"for focal point ({focal_point.x:.1f}, {focal_point.y:.1f})"
    )

    return Rectangle(x=crop_x, y=crop_y, width=crop_width, height=crop_height)
