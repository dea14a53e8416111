"""Tests for the monochrome display palette."""

import numpy as np
import pytest

from pxl2000.color import MonochromePalette, map_to_palette, quantize_luma
from pxl2000.core import PaletteDescriptor, PaletteKind


class TestMonochromePalette:
    def test_seven_level_ramp(self):
        palette = MonochromePalette(7)
        assert list(palette.ramp) == [0, 42, 85, 128, 170, 212, 255]

    def test_describe(self):
        desc = MonochromePalette(7).describe()
        assert desc.kind is PaletteKind.MONOCHROME
        assert desc.levels == 7
        assert desc.name == "monochrome-7"
        assert desc.colors[3] == 0xFF808080

    def test_only_monochrome_kind(self):
        assert list(PaletteKind) == [PaletteKind.MONOCHROME]

    def test_nearest(self):
        palette = MonochromePalette(7)
        out = palette.nearest(np.array([0, 20, 22, 153, 250]))
        assert list(out) == [0, 0, 42, 170, 255]

    def test_too_few_levels(self):
        with pytest.raises(ValueError):
            MonochromePalette(1)


class TestMapToPalette:
    def test_uses_descriptor_colors(self):
        desc = PaletteDescriptor(
            name="two-tone", kind=PaletteKind.MONOCHROME, levels=2,
            colors=(0xFF000000, 0xFFFFFFFF),
        )
        luma = np.array([[10, 200], [127, 128]], dtype=np.uint8)
        assert map_to_palette(luma, desc).tolist() == [[0, 255], [0, 255]]

    def test_rejects_empty_palette(self):
        desc = PaletteDescriptor(name="empty", kind=PaletteKind.MONOCHROME, levels=0)
        with pytest.raises(ValueError):
            map_to_palette(np.zeros((2, 2), dtype=np.uint8), desc)

    def test_quantize_ties_go_dark(self):
        assert quantize_luma(np.array([5]), np.array([0, 10]))[0] == 0
