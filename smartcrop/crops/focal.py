"""Focal point detection for smart cropping.

Every heuristic splits the image into square blocks, scores each block
and reports the winner at the block center. Blocks are laid out from the
top-left corner; a block that would reach the right or bottom edge is
dropped rather than padded.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Union

import numpy as np

from ..core.config import (
    CONTRAST_BLOCK_SIZE,
    EDGE_BLOCK_SIZE,
    SKIN_BLOCK_SIZE,
    SKIN_RATIO_THRESHOLD,
    SKIN_TONE_RULE,
)
from ..core.exceptions import UnknownMethodError
from ..core.models import BlockScore, CropMethod, FocalPoint, ImageBuffer, ThirdsPoint

logger = logging.getLogger(__name__)


def _block_grid(plane: np.ndarray, block_size: int) -> np.ndarray:
    """Split a 2D plane into a (rows, cols, block, block) grid of blocks.

    Block origins run 0, block, 2 * block, ... while strictly below
    dimension - block, so the last block that would touch the edge is
    left out along with any partial block.
    """
    height, width = plane.shape[:2]
    rows = len(range(0, height - block_size, block_size))
    cols = len(range(0, width - block_size, block_size))

    trimmed = plane[:rows * block_size, :cols * block_size]
    return (
        trimmed
        .reshape(rows, block_size, cols, block_size)
        .swapaxes(1, 2)
    )


def _block_scores(grid_scores: np.ndarray, block_size: int) -> list[BlockScore]:
    """Flatten a (rows, cols) score grid into block scores in scan order."""
    half = block_size / 2
    return [
        BlockScore(
            x=col * block_size + half,
            y=row * block_size + half,
            score=float(grid_scores[row, col]),
        )
        for row in range(grid_scores.shape[0])
        for col in range(grid_scores.shape[1])
    ]


def _best_block(scores: list[BlockScore]) -> Optional[FocalPoint]:
    """Highest scoring block, first in scan order on ties."""
    if not scores:
        return None
    best = max(scores, key=lambda s: s.score)
    return FocalPoint(x=best.x, y=best.y, score=best.score)


def find_edge_focal_point(
    buffer: ImageBuffer,
    block_size: int = EDGE_BLOCK_SIZE,
) -> Optional[FocalPoint]:
    """Find the block with the densest edges.

    Edges are brightness differences between each pixel and its right and
    lower neighbours inside the block.

    Args:
        buffer: Decoded image
        block_size: Block side length in pixels

    Returns:
        FocalPoint at the busiest block, or None if the image is smaller
        than one block
    """
    blocks = _block_grid(buffer.luminance, block_size)

    current = blocks[:, :, :-1, :-1]
    right = blocks[:, :, :-1, 1:]
    below = blocks[:, :, 1:, :-1]

    edge_scores = (np.abs(current - right) + np.abs(current - below)).sum(axis=(2, 3))

    result = _best_block(_block_scores(edge_scores, block_size))
    logger.debug(f"Edge density focal point: {result}")
    return result


def is_skin_tone(r: int, g: int, b: int) -> bool:
    """Check if an RGB colour passes the skin tone rule."""
    rule = SKIN_TONE_RULE
    return (
        r > rule['min_red'] and g > rule['min_green'] and b > rule['min_blue']
        and r > g and r > b
        and abs(r - g) > rule['min_red_green_diff']
        and r - b > rule['min_red_blue_diff']
    )


def skin_tone_mask(rgba: np.ndarray) -> np.ndarray:
    """Boolean mask of pixels that pass the skin tone rule."""
    rule = SKIN_TONE_RULE
    # int16 so channel differences can go negative
    rgb = rgba[:, :, :3].astype(np.int16)
    r, g, b = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]

    return (
        (r > rule['min_red']) & (g > rule['min_green']) & (b > rule['min_blue'])
        & (r > g) & (r > b)
        & (np.abs(r - g) > rule['min_red_green_diff'])
        & (r - b > rule['min_red_blue_diff'])
    )


def find_skin_focal_point(
    buffer: ImageBuffer,
    block_size: int = SKIN_BLOCK_SIZE,
    threshold: float = SKIN_RATIO_THRESHOLD,
) -> Optional[FocalPoint]:
    """Find the largest skin tone region, a cheap stand-in for faces.

    Only blocks whose share of skin pixels exceeds the threshold are
    candidates. Among those the block with the most skin pixels wins.

    Args:
        buffer: Decoded image
        block_size: Block side length in pixels
        threshold: Minimum skin pixel ratio for a candidate block

    Returns:
        FocalPoint at the chosen block (score is the skin ratio, area the
        skin pixel count), or None if no block qualifies
    """
    blocks = _block_grid(skin_tone_mask(buffer.rgba), block_size)
    counts = blocks.sum(axis=(2, 3))
    total = block_size * block_size

    best = None
    half = block_size / 2
    for row in range(counts.shape[0]):
        for col in range(counts.shape[1]):
            skin_pixels = int(counts[row, col])
            ratio = skin_pixels / total
            if ratio <= threshold:
                continue
            if best is None or skin_pixels > best.area:
                best = FocalPoint(
                    x=col * block_size + half,
                    y=row * block_size + half,
                    score=ratio,
                    area=skin_pixels,
                )

    logger.debug(f"Skin tone focal point: {best}")
    return best


def find_contrast_focal_point(
    buffer: ImageBuffer,
    block_size: int = CONTRAST_BLOCK_SIZE,
) -> Optional[FocalPoint]:
    """Find the block with the widest brightness range.

    Args:
        buffer: Decoded image
        block_size: Block side length in pixels

    Returns:
        FocalPoint at the highest contrast block, or None if the image is
        smaller than one block
    """
    blocks = _block_grid(buffer.luminance, block_size)
    contrast = blocks.max(axis=(2, 3)) - blocks.min(axis=(2, 3))

    result = _best_block(_block_scores(contrast, block_size))
    logger.debug(f"Contrast focal point: {result}")
    return result


def rule_of_thirds_points(width: float, height: float) -> list[ThirdsPoint]:
    """The four rule-of-thirds intersections of an image.

    There is no preferred point; the caller picks one.
    """
    return [
        ThirdsPoint(x=width / 3, y=height / 3, name='top-left'),
        ThirdsPoint(x=(2 * width) / 3, y=height / 3, name='top-right'),
        ThirdsPoint(x=width / 3, y=(2 * height) / 3, name='bottom-left'),
        ThirdsPoint(x=(2 * width) / 3, y=(2 * height) / 3, name='bottom-right'),
    ]


DETECTORS: dict[CropMethod, Callable[[ImageBuffer], Optional[FocalPoint]]] = {
    CropMethod.FACE: find_skin_focal_point,
    CropMethod.EDGE: find_edge_focal_point,
    CropMethod.CONTRAST: find_contrast_focal_point,
}

# Detectors tried in order; the first one that finds anything wins
METHOD_FALLBACKS: dict[CropMethod, tuple[CropMethod, ...]] = {
    CropMethod.AUTO: (CropMethod.FACE, CropMethod.EDGE),
    CropMethod.FACE: (CropMethod.FACE,),
    CropMethod.EDGE: (CropMethod.EDGE,),
    CropMethod.CONTRAST: (CropMethod.CONTRAST,),
}


def resolve_method(method: Union[str, CropMethod]) -> CropMethod:
    """Turn a method name into a CropMethod.

    Raises:
        UnknownMethodError: If the name isn't a known method
    """
    if isinstance(method, CropMethod):
        return method
    try:
        return CropMethod(str(method).lower())
    except ValueError:
        available = [m.value for m in CropMethod]
        raise UnknownMethodError(f"Unknown method: {method}. Available: {available}")


def estimate_focal_point(
    buffer: ImageBuffer,
    method: Union[str, CropMethod] = CropMethod.AUTO,
) -> Optional[FocalPoint]:
    """Pick a focal point with the given method.

    'auto' tries skin tone detection and falls back to edge density only
    when no block qualifies as skin.

    Args:
        buffer: Decoded image
        method: 'auto', 'face', 'edge' or 'contrast'

    Returns:
        FocalPoint, or None if no detector found one
    """
    method = resolve_method(method)

    for candidate in METHOD_FALLBACKS[method]:
        focal_point = DETECTORS[candidate](buffer)
        if focal_point is not None:
            logger.debug(f"Focal point from {candidate.value} ({method.value}): {focal_point}")
            return focal_point

    logger.debug(f"No focal point found with {method.value}")
    return None
