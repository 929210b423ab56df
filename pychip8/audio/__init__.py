"""Audio output for the CHIP-8 emulator."""

from .beeper import SquareWaveBeeper

__all__ = ["SquareWaveBeeper"]
