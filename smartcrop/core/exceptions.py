"""Custom exceptions for smartcrop."""


class SmartCropError(Exception):
    """Base exception for all smartcrop errors."""
    pass


class InvalidInputError(SmartCropError, ValueError):
    """Raised when a caller breaks an input precondition."""
    pass


class InvalidDimensionsError(InvalidInputError):
    """Raised when an image width or height is not positive."""
    pass


class InvalidAspectRatioError(InvalidInputError):
    """Raised when a target aspect ratio is not positive or can't be parsed."""
    pass


class InvalidImageError(InvalidInputError):
    """Raised when a pixel buffer doesn't match its declared size."""
    pass


class UnknownMethodError(InvalidInputError):
    """Raised when a focal point method name isn't recognised."""
    pass


class ImageLoadError(SmartCropError):
    """Raised when an image file can't be opened or decoded."""
    pass


class ExportError(SmartCropError):
    """Raised when a cropped image can't be written."""
    pass
