"""Core enumerations for the PXL-2000 effect."""

from enum import Enum, auto


class PaletteKind(Enum):
    """Families of palettes a filter can describe to the display side."""
    MONOCHROME = auto()
