"""Python CHIP-8 emulator.

The interpreter core lives in :mod:`pychip8.cpu` and :mod:`pychip8.video`;
the remaining subpackages are the loader, input, audio and pygame frontend
that drive it from ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
