"""Core data types for the PXL-2000 effect."""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .enums import PaletteKind
from .errors import FrameFormatError


# ============================================================================
# Pixel packing
# ============================================================================

ALPHA_MASK = np.uint32(0xFF000000)
LUMA_MASK = np.uint32(0x000000FF)
OPAQUE_BLACK = 0xFF000000


def pack_luma(luma: np.ndarray, alpha) -> np.ndarray:
    """Pack 8-bit luma into ``0xAARRGGBB`` words with all channels equal.

    Args:
        luma: Integer luma values in ``[0, 255]``.
        alpha: Either an alpha byte (``0..255``) or an array of packed
            words whose high byte is kept as-is.
    """
    lum = np.asarray(luma).astype(np.uint32)
    alpha = np.asarray(alpha)
    if alpha.dtype == np.uint32 and alpha.ndim > 0:
        high = alpha & ALPHA_MASK
    else:
        high = np.uint32(int(alpha) & 0xFF) << np.uint32(24)
    return high | (lum << np.uint32(16)) | (lum << np.uint32(8)) | lum


# ============================================================================
# Image buffer
# ============================================================================

@dataclass
class ImageBuffer:
    """A frame of packed 32-bit pixels in row-major order.

    Each element is ``0xAARRGGBB``: alpha in the high byte followed by
    three 8-bit channels. Filters mutate ``pixels`` in place.

    Attributes:
        pixels: Flat, C-contiguous ``uint32`` array of ``width * height``
            elements.
        width: Frame width in pixels.
        height: Frame height in pixels.
    """

    pixels: np.ndarray
    width: int
    height: int

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise :class:`FrameFormatError` if the layout is inconsistent."""
        if self.width < 0 or self.height < 0:
            raise FrameFormatError(
                f"Negative frame dimensions: {self.width}x{self.height}"
            )
        if not isinstance(self.pixels, np.ndarray):
            raise FrameFormatError("Pixel data must be a numpy array")
        if self.pixels.dtype != np.uint32:
            raise FrameFormatError(
                f"Pixel data must be uint32, got {self.pixels.dtype}"
            )
        if self.pixels.ndim != 1:
            raise FrameFormatError(
                f"Pixel data must be flat, got shape {self.pixels.shape}"
            )
        if self.pixels.size != self.width * self.height:
            raise FrameFormatError(
                f"Pixel count {self.pixels.size} does not match "
                f"{self.width}x{self.height}"
            )
        if not self.pixels.flags.c_contiguous:
            raise FrameFormatError("Pixel data must be C-contiguous")

    @classmethod
    def blank(cls, width: int, height: int, color: int = OPAQUE_BLACK) -> "ImageBuffer":
        """Create a buffer filled with a single packed color."""
        pixels = np.full(width * height, color, dtype=np.uint32)
        return cls(pixels=pixels, width=width, height=height)

    @classmethod
    def from_luma(cls, luma: np.ndarray, alpha: int = 0xFF) -> "ImageBuffer":
        """Create a monochrome buffer from an ``(H, W)`` luma array."""
        luma = np.asarray(luma)
        if luma.ndim != 2:
            raise FrameFormatError(f"Luma must be 2-D, got shape {luma.shape}")
        height, width = luma.shape
        pixels = np.ascontiguousarray(pack_luma(luma, alpha).reshape(-1))
        return cls(pixels=pixels, width=width, height=height)

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    def rows(self) -> np.ndarray:
        """``(H, W)`` view onto ``pixels``; writes go through to the buffer."""
        return self.pixels.reshape(self.height, self.width)

    def luma(self) -> np.ndarray:
        """Low channel of every pixel as an ``(H, W)`` uint8 array."""
        return (self.rows() & LUMA_MASK).astype(np.uint8)

    def alpha(self) -> np.ndarray:
        """Alpha byte of every pixel as an ``(H, W)`` uint8 array."""
        return (self.rows() >> np.uint32(24)).astype(np.uint8)

    def copy(self) -> "ImageBuffer":
        return ImageBuffer(
            pixels=self.pixels.copy(), width=self.width, height=self.height
        )


# ============================================================================
# Palettes
# ============================================================================

@dataclass(frozen=True)
class PaletteDescriptor:
    """Description of the colors a filter's output is meant to be shown in.

    Consumed by the display side to convert filter output; never used
    for pixel math inside a filter.
    """
    name: str
    kind: PaletteKind
    levels: int
    colors: Tuple[int, ...] = field(default_factory=tuple)
