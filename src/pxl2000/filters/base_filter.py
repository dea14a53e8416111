"""Base filter interface for frame effects."""

from abc import ABC, abstractmethod
import logging
import threading

from pxl2000.core import ImageBuffer, PaletteDescriptor


logger = logging.getLogger(__name__)


class ImageFilter(ABC):
    """Abstract base class for in-place frame effects.

    Filters are responsible for:
    1. Transforming a frame in place
    2. Telling the display side how to interpret the result

    Subclasses must implement:
    - _apply(): The per-frame transformation
    - is_monochrome(): Whether output channels are already equal
    - described_palette(): The palette the output is meant for

    :meth:`process` runs ``_apply`` under a per-instance lock, so frames
    on one filter never overlap even when callers share the instance
    across threads.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def _apply(self, frame: ImageBuffer) -> None:
        """Transform ``frame`` in place."""
        pass

    @abstractmethod
    def is_monochrome(self) -> bool:
        """Return ``True`` if the output carries luma only."""
        pass

    @abstractmethod
    def described_palette(self) -> PaletteDescriptor:
        """Return the palette downstream color conversion should use."""
        pass

    def process(self, frame: ImageBuffer) -> None:
        """Apply the filter to ``frame`` in place.

        Raises:
            FrameFormatError: If ``frame`` does not match its declared
                layout. The frame is left untouched.
        """
        frame.validate()
        with self._lock:
            try:
                self._apply(frame)
            except Exception as e:
                logger.error("%s failed on %dx%d frame: %s",
                             self.name, frame.width, frame.height, e,
                             exc_info=True)
                raise
