"""Convert the display framebuffer into RGB pixels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .display import DISPLAY_HEIGHT, DISPLAY_WIDTH
from .palette import MONOCHROME, RGBColor, blend, validate_palette


@dataclass
class RenderResult:
    """A rendered frame as rows of RGB tuples."""

    width: int
    height: int
    pixels: List[List[RGBColor]]

    def get_pixel(self, x: int, y: int) -> RGBColor:
        return self.pixels[y][x]

    def to_bytes(self) -> bytes:
        buffer = bytearray()
        for row in self.pixels:
            for color in row:
                buffer.extend(color)
        return bytes(buffer)

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombytes(self.to_bytes(), (self.width, self.height), "RGB")


class Renderer:
    """Map framebuffer intensities to colours with an integer scale."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._palette = validate_palette(palette)
        self._lut = [blend(self._palette, value) for value in range(256)]

    def render(self, framebuffer: bytes | bytearray, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        expected = DISPLAY_WIDTH * DISPLAY_HEIGHT
        if len(framebuffer) != expected:
            raise ValueError(f"framebuffer must contain {expected} cells, got {len(framebuffer)}")

        lut = self._lut
        rows: List[List[RGBColor]] = []
        for y in range(DISPLAY_HEIGHT):
            start = y * DISPLAY_WIDTH
            row: List[RGBColor] = []
            for value in framebuffer[start : start + DISPLAY_WIDTH]:
                row.extend([lut[value]] * scale)
            for _ in range(scale):
                rows.append(list(row))
        return RenderResult(DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale, rows)
