"""Core types and enums for the PXL-2000 effect."""

from .enums import PaletteKind

from .errors import Pxl2000Error, FrameFormatError

from .types import (
    # Packing
    ALPHA_MASK,
    LUMA_MASK,
    OPAQUE_BLACK,
    pack_luma,
    # Buffers
    ImageBuffer,
    # Palettes
    PaletteDescriptor,
)

__all__ = [
    # Enums
    "PaletteKind",
    # Errors
    "Pxl2000Error",
    "FrameFormatError",
    # Types
    "ALPHA_MASK",
    "LUMA_MASK",
    "OPAQUE_BLACK",
    "pack_luma",
    "ImageBuffer",
    "PaletteDescriptor",
]
