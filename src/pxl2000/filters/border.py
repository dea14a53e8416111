"""Final copy of the accumulator into the frame plus the border mask."""

import numpy as np

from pxl2000.core import ImageBuffer, OPAQUE_BLACK


class BorderCompositor:
    """Writes processed pixels back to the frame and paints its edges.

    Args:
        color: Packed ``0xAARRGGBB`` color of the border.
    """

    def __init__(self, color: int = OPAQUE_BLACK):
        self.color = np.uint32(color)

    def composite(self, frame: ImageBuffer, accumulator: np.ndarray, border: int) -> None:
        """Copy ``accumulator`` into ``frame`` and paint a ``border``-wide mask."""
        frame.pixels[:] = accumulator

        rows = frame.rows()
        height, width = frame.height, frame.width
        rows[:border] = self.color
        rows[height - border:] = self.color
        if border > 0:
            rows[border:height - border, :border] = self.color
            rows[border:height - border, width - border:] = self.color

    def fill(self, frame: ImageBuffer) -> None:
        """Paint the whole frame with the border color."""
        frame.pixels[:] = self.color
