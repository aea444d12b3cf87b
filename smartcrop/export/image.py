"""Image loading, rendering and saving."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.config import IMAGE_EXTENSIONS, JPEG_QUALITY
from ..core.exceptions import ExportError, ImageLoadError, InvalidImageError
from ..core.models import ImageBuffer, Rectangle

logger = logging.getLogger(__name__)


def load_image(path: Path) -> Image.Image:
    """Open an image file, applying its EXIF orientation.

    Args:
        path: Image file path

    Returns:
        PIL Image

    Raises:
        ImageLoadError: If the file is missing, not an image or can't be decoded
    """
    path = Path(path)
    if not path.exists():
        raise ImageLoadError(f"Image not found: {path}")
    if path.suffix.lower() not in IMAGE_EXTENSIONS:
        raise ImageLoadError(f"Not an image file: {path}")

    try:
        with Image.open(path) as opened:
            image = ImageOps.exif_transpose(opened).copy()  # Copy to release file handle
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to load image {path}: {e}")

    logger.debug(f"Loaded {path.name}: {image.width}x{image.height} {image.mode}")
    return image


def image_to_buffer(image: Union[Image.Image, np.ndarray]) -> ImageBuffer:
    """Convert a PIL Image or numpy array to an RGBA buffer.

    Arrays must be uint8 and either grayscale (H, W), RGB (H, W, 3) or
    RGBA (H, W, 4).

    Raises:
        InvalidImageError: If the array can't be read as an image
    """
    if isinstance(image, Image.Image):
        return ImageBuffer.from_array(np.asarray(image.convert('RGBA')))

    img_array = np.asarray(image)
    if img_array.dtype != np.uint8:
        raise InvalidImageError(f"Expected uint8 pixels, got {img_array.dtype}")

    # Handle different channel layouts
    if img_array.ndim == 2:
        img_array = cv2.cvtColor(img_array, cv2.COLOR_GRAY2RGBA)
    elif img_array.ndim == 3 and img_array.shape[2] == 3:
        img_array = cv2.cvtColor(img_array, cv2.COLOR_RGB2RGBA)
    elif not (img_array.ndim == 3 and img_array.shape[2] == 4):
        raise InvalidImageError(f"Unsupported image array shape {img_array.shape}")

    return ImageBuffer.from_array(img_array)


def render_crop(
    image: Image.Image,
    crop_area: Rectangle,
    output_width: int,
    output_height: int,
) -> Image.Image:
    """Resample a region of the source image to the output size.

    The region may have fractional edges.

    Args:
        image: Source image
        crop_area: Region of the source to keep
        output_width: Width of the result
        output_height: Height of the result

    Returns:
        Cropped and resized image
    """
    # Keep the box inside the image, Pillow rejects anything outside
    left, upper, right, lower = crop_area.as_box()
    box = (
        max(0.0, left),
        max(0.0, upper),
        min(float(image.width), right),
        min(float(image.height), lower),
    )

    size = (max(1, int(output_width)), max(1, int(output_height)))
    logger.debug(f"Rendering box {box} to {size[0]}x{size[1]}")

    return image.resize(size, Image.LANCZOS, box=box)


def _to_jpeg_mode(image: Image.Image) -> Image.Image:
    """Convert an image to a mode JPEG can store (RGB, L or CMYK)."""
    if image.mode in ('RGB', 'L', 'CMYK'):
        return image

    if image.mode.startswith('I;16'):
        # 16-bit grayscale, scale down to 8 bits
        image = image.convert('I').point(lambda v: v * (1 / 256))
    if image.mode in ('I', 'F'):
        return image.convert('L')
    if image.mode == 'PA':
        image = image.convert('RGBA')

    # Alpha, palette and other colour spaces
    return image.convert('RGB')


def export_image(
    image: Image.Image,
    output_path: Path,
    quality: int = JPEG_QUALITY,
) -> Path:
    """Save an image as JPEG, or PNG for a .png path.

    Args:
        image: PIL Image to save
        output_path: Where to save
        quality: JPEG quality (1-100)

    Returns:
        Path to saved file

    Raises:
        ExportError: If the file can't be written
    """
    output_path = Path(output_path)

    # Ensure parent directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        if output_path.suffix.lower() == '.png':
            image.save(output_path, 'PNG', optimize=True)
        else:
            image = _to_jpeg_mode(image)
            image.save(output_path, 'JPEG', quality=quality, optimize=True)
    except OSError as e:
        raise ExportError(f"Failed to save {output_path}: {e}")

    logger.debug(f"Saved image: {output_path}")
    return output_path
