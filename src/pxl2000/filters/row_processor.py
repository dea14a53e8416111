"""Per-row blur, sharpen and posterize pass of the PXL-2000 effect."""

from typing import Callable, Optional

import numpy as np

from pxl2000.core import ALPHA_MASK, LUMA_MASK, pack_luma
from pxl2000.utils.config import FilterConfig


_F0 = np.float32(0.0)
_F128 = np.float32(128.0)
_F255 = np.float32(255.0)
_F259 = np.float32(259.0)
_HALF = np.float32(0.5)


def _luma(pixels: np.ndarray) -> np.ndarray:
    return (pixels & LUMA_MASK).astype(np.float32)


class ConvolutionRowProcessor:
    """Computes new luma for half of the interior pixels of a row range.

    Only columns ``border + phase, border + phase + 2, ...`` are
    recomputed; the other half of each row keeps the value stored in the
    accumulator from earlier frames. The phase flips every row and every
    frame, producing the interleave/ghosting look of a PXL-2000 tape.

    All arithmetic is single precision and the kernel is accumulated in
    row-major order, so results are reproducible bit for bit.

    Args:
        config: Effect constants. Defaults to :class:`FilterConfig`.
    """

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or FilterConfig()
        self._kernel = np.asarray(self.config.blur_kernel, dtype=np.float32)
        self._sharpen = np.float32(self.config.sharpen_amount)
        self._compression = np.float32(self.config.dynamic_range_compression)
        self._step = _F255 / np.float32(self.config.posterize_levels)
        self._floor = np.float32(self.config.light_floor)
        self._ceiling = np.float32(self.config.light_ceiling)

    def process_rows(
        self,
        source: np.ndarray,
        target: np.ndarray,
        row_start: int,
        row_end: int,
        border: int,
        phase_for: Callable[[int], int],
    ) -> None:
        """Recompute rows ``[row_start, row_end)`` into ``target``.

        Args:
            source: ``(H, W)`` packed pixels of the current frame. Read only.
            target: ``(H, W)`` packed accumulator. Only rows inside the
                range are written.
            row_start: First row, at least ``border``.
            row_end: One past the last row, at most ``H - border``.
            border: Border width; must be at least 1 so that every
                neighbour index stays inside the buffers.
            phase_for: Maps a row to its column offset for this frame.
        """
        width = source.shape[1]
        last = width - border
        for y in range(row_start, row_end):
            first = border + phase_for(y)
            if first >= last:
                continue
            self._process_row(source, target, y, first, last)

    def _process_row(
        self,
        source: np.ndarray,
        target: np.ndarray,
        y: int,
        first: int,
        last: int,
    ) -> None:
        k = self._kernel
        center = slice(first, last, 2)
        left = slice(first - 1, last - 1, 2)
        right = slice(first + 1, last + 1, 2)

        # Corners and center come from the current frame, the four edge
        # neighbours from the accumulator.
        lum = np.zeros(len(range(first, last, 2)), dtype=np.float32)
        lum += _luma(source[y - 1, left]) * k[0]
        lum += _luma(target[y - 1, center]) * k[1]
        lum += _luma(source[y - 1, right]) * k[2]
        lum += _luma(target[y, left]) * k[3]
        lum += _luma(source[y, center]) * k[4]
        lum += _luma(target[y, right]) * k[5]
        lum += _luma(source[y + 1, left]) * k[6]
        lum += _luma(target[y + 1, center]) * k[7]
        lum += _luma(source[y + 1, right]) * k[8]

        pixels = source[y, center]
        lum = self.transform(_luma(pixels), lum)

        target[y, center] = pack_luma(lum.astype(np.uint32), pixels & ALPHA_MASK)

    def transform(self, original: np.ndarray, blurred: np.ndarray) -> np.ndarray:
        """Unsharp mask, clamp, compress and posterize blurred luma.

        Args:
            original: Unblurred luma of the pixels, ``float32``.
            blurred: Kernel-weighted luma of the same pixels, ``float32``.

        Returns:
            ``float32`` luma on the posterization lattice, clamped to the
            configured light levels.
        """
        contrast = np.abs(original - blurred) * self._sharpen
        factor = (_F259 * (contrast + _F255)) / (_F255 * (_F259 - contrast))
        lum = factor * (blurred - _F128) + _F128

        lum = np.maximum(self._floor, np.minimum(lum, self._ceiling))

        # Pure scale, not centred on mid-grey
        lum = lum * self._compression

        lum = _round_half_up(lum / self._step) * self._step

        return np.maximum(self._floor, np.minimum(lum, self._ceiling))


def _round_half_up(values: np.ndarray) -> np.ndarray:
    whole = np.floor(values)
    return whole + np.where(values - whole >= _HALF, np.float32(1.0), _F0).astype(np.float32)
