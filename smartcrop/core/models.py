"""Data models for smartcrop."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np
from PIL import Image

from .exceptions import InvalidImageError


class CropMethod(Enum):
    """How the focal point of an image is chosen."""
    AUTO = "auto"          # Skin tone first, then edge density
    FACE = "face"          # Skin tone blobs as a face proxy
    EDGE = "edge"          # Densest edges
    CONTRAST = "contrast"  # Widest brightness range


@dataclass(frozen=True)
class ImageBuffer:
    """A decoded image as a flat RGBA byte sequence.

    The buffer is owned by the caller and never modified here.
    """
    width: int
    height: int
    data: bytes  # RGBA, row-major, width * height * 4 bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise InvalidImageError(
                f"RGBA buffer has {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height}"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> ImageBuffer:
        """Build a buffer from a (height, width, 4) uint8 array."""
        if array.ndim != 3 or array.shape[2] != 4:
            raise InvalidImageError(f"Expected an RGBA array, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise InvalidImageError(f"Expected uint8 pixels, got {array.dtype}")
        height, width = array.shape[:2]
        return cls(width=width, height=height, data=np.ascontiguousarray(array).tobytes())

    @property
    def rgba(self) -> np.ndarray:
        """Read-only (height, width, 4) view of the pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)

    @property
    def luminance(self) -> np.ndarray:
        """Per-pixel brightness, the mean of R, G and B."""
        # 3 * 255 fits in uint16
        return self.rgba[:, :, :3].sum(axis=2, dtype=np.uint16) / 3


@dataclass(frozen=True)
class Rectangle:
    """A crop region in source image pixels.

    Coordinates are floats measured from the top-left corner.
    """
    x: float       # Left edge
    y: float       # Top edge
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge X coordinate."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge Y coordinate."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return as (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def as_box(self) -> tuple[float, float, float, float]:
        """Return as a Pillow (left, upper, right, lower) box."""
        return (self.x, self.y, self.right, self.bottom)


@dataclass(frozen=True)
class FocalPoint:
    """The point an image crop should be centered on."""
    x: float
    y: float
    score: float
    area: Optional[int] = None  # Skin pixel count, skin tone method only


@dataclass(frozen=True)
class BlockScore:
    """Score of one scan block, reported at the block center."""
    x: float
    y: float
    score: float


@dataclass(frozen=True)
class ThirdsPoint:
    """A rule-of-thirds intersection."""
    x: float
    y: float
    name: str  # 'top-left', 'top-right', 'bottom-left', 'bottom-right'


@dataclass
class CropResult:
    """Output of a smart crop."""
    image: Image.Image
    focal_point: Optional[FocalPoint]
    crop_area: Rectangle
    method: CropMethod

    @property
    def has_focal_point(self) -> bool:
        """Whether a heuristic picked the crop position."""
        return self.focal_point is not None
