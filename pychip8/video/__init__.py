"""Video helpers for the CHIP-8 emulator."""

from __future__ import annotations

from .display import DISPLAY_HEIGHT, DISPLAY_WIDTH, PIXEL_FADE_RATE, PIXEL_ON, Display
from .font import DEFAULT_FONT, FONT_START, GLYPH_BYTES
from .palette import AMBER, MONOCHROME, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Display",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "PIXEL_ON",
    "PIXEL_FADE_RATE",
    "DEFAULT_FONT",
    "FONT_START",
    "GLYPH_BYTES",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "AMBER",
    "validate_palette",
]
