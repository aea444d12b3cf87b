"""Image loading, rendering and export."""

from .image import load_image, image_to_buffer, render_crop, export_image

__all__ = [
    'load_image',
    'image_to_buffer',
    'render_crop',
    'export_image',
]
