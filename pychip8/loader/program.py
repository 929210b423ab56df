"""Raw CHIP-8 program images."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MEMORY_SIZE
from pychip8.cpu.core import PROGRAM_START

MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


class ProgramFormatError(RuntimeError):
    """Raised when a program image cannot be installed."""


@dataclass(frozen=True)
class ProgramImage:
    """A headerless program loaded verbatim at 0x200."""

    data: bytes
    name: str = ""
    compatibility_mode: bool = False

    @property
    def start(self) -> int:
        return PROGRAM_START

    @property
    def end(self) -> int:
        return PROGRAM_START + len(self.data) - 1

    def __len__(self) -> int:
        return len(self.data)


def load_program(data: bytes, *, name: str = "", compatibility_mode: bool = False) -> ProgramImage:
    """Validate ``data`` and wrap it in a :class:`ProgramImage`."""

    if not data:
        raise ProgramFormatError("program image is empty")
    if len(data) > MAX_PROGRAM_SIZE:
        raise ProgramFormatError(
            f"program image is {len(data)} bytes; at most {MAX_PROGRAM_SIZE} fit at {PROGRAM_START:#05x}"
        )
    return ProgramImage(bytes(data), name, compatibility_mode)


def read_program(stream: BinaryIO, *, name: str = "", compatibility_mode: bool = False) -> ProgramImage:
    # Read one byte past the limit so oversized images are detected.
    data = stream.read(MAX_PROGRAM_SIZE + 1)
    return load_program(data, name=name, compatibility_mode=compatibility_mode)


def load_program_from_path(path: Path, *, compatibility_mode: bool = False) -> ProgramImage:
    """Load a program image from the filesystem."""

    with path.open("rb") as handle:
        return read_program(handle, name=path.stem, compatibility_mode=compatibility_mode)
