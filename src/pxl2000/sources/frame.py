"""Frame record and OpenCV conversions for PXL-2000 frame sources."""

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from pxl2000.color import map_to_palette
from pxl2000.core import FrameFormatError, ImageBuffer, PaletteDescriptor


@dataclass
class Frame:
    """A single video frame with metadata.

    Attributes:
        buffer: Packed monochrome pixels ready for a filter.
        timestamp: Seconds since the source was opened (monotonic for live
            sources, video-time for file sources).
        frame_number: Sequential counter starting from 0.
        source_name: Human-readable identifier, e.g. ``"webcam:0"`` or
            ``"file:video.mp4"``.
    """

    buffer: ImageBuffer
    timestamp: float
    frame_number: int
    source_name: str

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


def buffer_from_bgr(image: np.ndarray, alpha: int = 0xFF) -> ImageBuffer:
    """Convert an OpenCV image to a packed monochrome buffer.

    Args:
        image: BGR ``(H, W, 3)`` or greyscale ``(H, W)`` uint8 array.
        alpha: Alpha byte stored in every pixel.
    """
    if image.ndim == 3:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    elif image.ndim == 2:
        gray = image
    else:
        raise FrameFormatError(f"Unsupported image shape: {image.shape}")
    return ImageBuffer.from_luma(gray, alpha=alpha)


def buffer_to_bgr(
    buffer: ImageBuffer,
    palette: Optional[PaletteDescriptor] = None,
) -> np.ndarray:
    """Convert a packed buffer back to a BGR uint8 image for display.

    Args:
        buffer: Packed ``0xAARRGGBB`` pixels.
        palette: When given, luma is quantized onto this monochrome
            palette and written to all three channels.
    """
    if palette is not None:
        gray = map_to_palette(buffer.luma(), palette)
        return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)

    rows = buffer.rows()
    red = ((rows >> np.uint32(16)) & np.uint32(0xFF)).astype(np.uint8)
    green = ((rows >> np.uint32(8)) & np.uint32(0xFF)).astype(np.uint8)
    blue = (rows & np.uint32(0xFF)).astype(np.uint8)
    return np.dstack([blue, green, red])
