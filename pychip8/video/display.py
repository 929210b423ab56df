"""Monochrome framebuffer with XOR sprite drawing and phosphor fade.

Each cell stores an intensity: ``0`` is off, ``0xFF`` is fully lit and any
value in between is a pixel that was switched off and is fading out. The
renderer is free to map intensities to colours however it likes.
"""

from __future__ import annotations

from typing import Iterable

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
PIXEL_ON = 0xFF
PIXEL_OFF = 0x00
PIXEL_FADE_RATE = 8


class Display:
    """64x32 intensity framebuffer, row-major (``index = y * WIDTH + x``)."""

    width = DISPLAY_WIDTH
    height = DISPLAY_HEIGHT

    def __init__(self) -> None:
        self.data = bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT)

    def clear(self) -> None:
        self.data[:] = bytes(len(self.data))

    def fade_pixels(self) -> None:
        """Dim every fading pixel by one step; call once per rendered frame."""

        data = self.data
        for index, value in enumerate(data):
            if PIXEL_OFF < value < PIXEL_ON:
                data[index] = value - PIXEL_FADE_RATE if value >= PIXEL_FADE_RATE else PIXEL_OFF

    def drop_fading(self) -> None:
        """Switch off every pixel that is not fully lit."""

        data = self.data
        for index, value in enumerate(data):
            if value != PIXEL_ON:
                data[index] = PIXEL_OFF

    def draw_sprite(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        """XOR ``sprite`` rows onto the framebuffer and report a collision.

        The origin wraps onto the screen; rows and columns past the right or
        bottom edge are clipped.
        """

        collision = False
        origin_x = x % DISPLAY_WIDTH
        row = y % DISPLAY_HEIGHT
        for line in sprite:
            if row >= DISPLAY_HEIGHT:
                break
            for column in range(8):
                px = origin_x + column
                if px >= DISPLAY_WIDTH:
                    break
                if line & (0x80 >> column):
                    collision |= self._flip_pixel_at(px, row)
            row += 1
        return collision

    def _flip_pixel_at(self, x: int, y: int) -> bool:
        index = y * DISPLAY_WIDTH + x
        if self.data[index] == PIXEL_ON:
            self.data[index] = PIXEL_ON - PIXEL_FADE_RATE
            return True
        self.data[index] = PIXEL_ON
        return False

    def get_pixel(self, x: int, y: int) -> int:
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) outside {DISPLAY_WIDTH}x{DISPLAY_HEIGHT} display")
        return self.data[y * DISPLAY_WIDTH + x]

    def is_lit(self, x: int, y: int) -> bool:
        return self.get_pixel(x, y) == PIXEL_ON
