"""Exceptions raised by the picture pipeline."""


class PictureError(Exception):
    """Base class for all picture processing failures."""


class InvalidRadius(PictureError, ValueError):
    """Raised when a blur radius is not a positive integer."""


class DimensionMismatch(PictureError, ValueError):
    """Raised when a kernel or pixel grid has the wrong shape."""


class UnsupportedMode(PictureError, ValueError):
    """Raised for an unknown color model, or one the codec cannot store."""


class CodecError(PictureError):
    """Raised when image data cannot be decoded or encoded."""


class SearchError(PictureError):
    """Raised when a remote image search or fetch fails."""
