"""Pytest configuration and shared fixtures for PXL-2000 tests."""

import numpy as np
import pytest

from pxl2000.core import ImageBuffer, pack_luma
from pxl2000.filters import Pxl2000Filter
from pxl2000.parallel import SerialScheduler


def make_frame(width, height, luma=None, alpha=0xFF, seed=0):
    """Build a packed monochrome frame.

    ``luma`` may be a constant, an ``(H, W)`` array or ``None`` for
    random content. ``alpha`` may be a constant byte or ``"random"``.
    """
    rng = np.random.default_rng(seed)
    if luma is None:
        luma = rng.integers(0, 256, size=(height, width))
    luma = np.broadcast_to(np.asarray(luma), (height, width))

    if isinstance(alpha, str) and alpha == "random":
        words = rng.integers(0, 256, size=(height, width)).astype(np.uint32)
        alpha = words << np.uint32(24)

    pixels = pack_luma(luma, alpha).reshape(-1)
    return ImageBuffer(pixels=np.ascontiguousarray(pixels), width=width, height=height)


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def serial_filter():
    pxl_filter = Pxl2000Filter(scheduler=SerialScheduler())
    yield pxl_filter
    pxl_filter.close()
