"""Palettes for displaying filter output."""

from .palette import MonochromePalette, map_to_palette, quantize_luma

__all__ = ["MonochromePalette", "map_to_palette", "quantize_luma"]
