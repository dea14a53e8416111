"""Interface shared by everything that hands frames to the filter."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from pxl2000.sources.frame import Frame


class FrameSource(ABC):
    """Produces packed monochrome frames until exhausted.

    A source is opened and closed around a capture session; iterating it
    yields :class:`Frame` records whose ``buffer`` can go straight into
    ``Pxl2000Filter.process``::

        with create_source(config.source) as src:
            for frame in src:
                pxl_filter.process(frame.buffer)
    """

    @abstractmethod
    def open(self) -> None:
        """Acquire the device or file. Calling it twice is harmless."""

    @abstractmethod
    def close(self) -> None:
        """Release the device or file."""

    @abstractmethod
    def read(self) -> Optional[Frame]:
        """Next frame, or ``None`` at end of stream or on a failed grab."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Label used in logs, e.g. ``"webcam:0"`` or ``"file:clip.mp4"``."""

    @property
    @abstractmethod
    def fps(self) -> float:
        """Rate to play or record the processed frames at."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether :meth:`open` succeeded and :meth:`close` has not run."""

    def __enter__(self) -> "FrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[Frame]:
        return self

    def __next__(self) -> Frame:
        frame = self.read()
        if frame is None:
            raise StopIteration
        return frame
