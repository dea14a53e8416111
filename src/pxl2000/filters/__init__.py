"""Frame filters."""

from .base_filter import ImageFilter
from .accumulator import FrameAccumulator
from .sequence import SequenceController
from .row_processor import ConvolutionRowProcessor
from .border import BorderCompositor
from .pxl2000_filter import Pxl2000Filter

__all__ = [
    "ImageFilter",
    "FrameAccumulator",
    "SequenceController",
    "ConvolutionRowProcessor",
    "BorderCompositor",
    "Pxl2000Filter",
]
