"""Frame sources feeding the PXL-2000 filter.

Quick start::

    from pxl2000.sources import VideoFileSource

    with VideoFileSource("demo.mp4") as src:
        for frame in src:
            pxl_filter.process(frame.buffer)
"""

from pxl2000.sources.frame import Frame, buffer_from_bgr, buffer_to_bgr
from pxl2000.sources.base import FrameSource
from pxl2000.sources.capture import WebcamSource, VideoFileSource, create_source

__all__ = [
    "Frame",
    "buffer_from_bgr",
    "buffer_to_bgr",
    "FrameSource",
    "WebcamSource",
    "VideoFileSource",
    "create_source",
]
