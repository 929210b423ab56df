"""Palette definitions for CHIP-8 rendering."""

from __future__ import annotations

from typing import Sequence, Tuple

RGBColor = Tuple[int, int, int]


MONOCHROME: Tuple[RGBColor, RGBColor] = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
AMBER: Tuple[RGBColor, RGBColor] = ((0x10, 0x08, 0x00), (0xFF, 0xB0, 0x00))


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[RGBColor, RGBColor]:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    if any(len(color) != 3 for color in palette):
        raise ValueError("palette entries must be RGB tuples")
    return tuple(tuple(int(channel) & 0xFF for channel in color) for color in palette)  # type: ignore[return-value]


def blend(palette: Tuple[RGBColor, RGBColor], intensity: int) -> RGBColor:
    """Interpolate between background and foreground by ``intensity`` (0-255)."""

    background, foreground = palette
    intensity &= 0xFF
    return tuple(
        back + ((fore - back) * intensity) // 0xFF
        for back, fore in zip(background, foreground)
    )  # type: ignore[return-value]
