"""Persistent memory of the previous frame's processed output."""

import logging
from typing import Optional

import numpy as np

from pxl2000.core import ImageBuffer


logger = logging.getLogger(__name__)


class FrameAccumulator:
    """Holds the last processed frame for temporal mixing.

    The buffer has the same packed layout and length as the frames fed
    to the filter. It is created lazily and reseeded from the incoming
    frame whenever the pixel count changes, so the first frame after a
    resize blends with itself instead of stale data.
    """

    def __init__(self):
        self._buffer: Optional[np.ndarray] = None

    @property
    def buffer(self) -> Optional[np.ndarray]:
        """The committed buffer, or ``None`` before the first frame."""
        return self._buffer

    def ensure_capacity(self, frame: ImageBuffer) -> bool:
        """Make the buffer match ``frame``'s pixel count.

        Returns:
            ``True`` if the buffer was (re)allocated and seeded from
            ``frame``, ``False`` if it already matched.
        """
        if self._buffer is not None and self._buffer.size == frame.size:
            return False

        previous = None if self._buffer is None else self._buffer.size
        self._buffer = frame.pixels.copy()
        logger.debug(
            "Accumulator seeded for %dx%d frame (previous size: %s)",
            frame.width, frame.height, previous,
        )
        return True

    def stage(self) -> np.ndarray:
        """Return a working copy for the next frame's writes."""
        if self._buffer is None:
            raise RuntimeError("Accumulator has not been seeded")
        return self._buffer.copy()

    def commit(self, staged: np.ndarray) -> None:
        """Replace the committed buffer with a fully written working copy."""
        if self._buffer is not None and staged.size != self._buffer.size:
            raise ValueError(
                f"Staged buffer has {staged.size} pixels, "
                f"accumulator holds {self._buffer.size}"
            )
        self._buffer = staged

    def reset(self) -> None:
        """Forget the stored frame; the next frame reseeds the buffer."""
        self._buffer = None
