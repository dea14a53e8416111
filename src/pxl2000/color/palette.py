"""Monochrome palette used to display single-channel filter output."""

import numpy as np

from pxl2000.core import LUMA_MASK, PaletteDescriptor, PaletteKind, pack_luma


def quantize_luma(luma: np.ndarray, ramp: np.ndarray) -> np.ndarray:
    """Replace each luma value with the closest entry of ``ramp``.

    Ties go to the darker entry.
    """
    luma = np.asarray(luma, dtype=np.int16)
    ramp = np.asarray(ramp, dtype=np.int16)
    index = np.abs(luma[..., np.newaxis] - ramp).argmin(axis=-1)
    return ramp[index].astype(np.uint8)


def map_to_palette(luma: np.ndarray, palette: PaletteDescriptor) -> np.ndarray:
    """Quantize luma onto the grey levels named by a palette descriptor."""
    if not palette.colors:
        raise ValueError(f"Palette {palette.name!r} has no colors")
    ramp = np.asarray(palette.colors, dtype=np.uint32) & LUMA_MASK
    return quantize_luma(luma, ramp)


class MonochromePalette:
    """Evenly spaced grey ramp from black to white.

    Args:
        levels: Number of discrete grey levels (at least 2).
    """

    def __init__(self, levels: int = 7):
        if levels < 2:
            raise ValueError(f"A monochrome ramp needs at least 2 levels, got {levels}")
        self._levels = levels
        self._ramp = np.round(np.linspace(0, 255, levels)).astype(np.uint8)

    @property
    def levels(self) -> int:
        return self._levels

    @property
    def ramp(self) -> np.ndarray:
        """Grey value of each level, darkest first."""
        return self._ramp.copy()

    def nearest(self, luma: np.ndarray) -> np.ndarray:
        """Map luma values onto the closest level of the ramp."""
        return quantize_luma(luma, self._ramp)

    def describe(self) -> PaletteDescriptor:
        colors = tuple(int(c) for c in pack_luma(self._ramp, 0xFF))
        return PaletteDescriptor(
            name=f"monochrome-{self._levels}",
            kind=PaletteKind.MONOCHROME,
            levels=self._levels,
            colors=colors,
        )
