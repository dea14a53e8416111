"""Exceptions raised by the PXL-2000 effect."""


class Pxl2000Error(ValueError):
    """Base class for errors raised on malformed input."""


class FrameFormatError(Pxl2000Error):
    """Raised when an image buffer does not match its declared layout."""
