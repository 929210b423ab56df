"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .program import (
    MAX_PROGRAM_SIZE,
    ProgramFormatError,
    ProgramImage,
    load_program,
    load_program_from_path,
    read_program,
)

__all__ = [
    "MAX_PROGRAM_SIZE",
    "ProgramFormatError",
    "ProgramImage",
    "load_program",
    "load_program_from_path",
    "read_program",
]
