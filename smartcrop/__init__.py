"""smartcrop - Aspect ratio and focal point image cropping."""

__version__ = '0.1.0'
