"""Tests for raw CHIP-8 program loading."""

from __future__ import annotations

import io

import pytest

from pychip8.loader import (
    MAX_PROGRAM_SIZE,
    ProgramFormatError,
    load_program,
    load_program_from_path,
    read_program,
)


def test_load_program_wraps_bytes() -> None:
    image = load_program(b"\x00\xE0\x12\x00", name="demo", compatibility_mode=True)

    assert image.data == b"\x00\xE0\x12\x00"
    assert image.name == "demo"
    assert image.compatibility_mode
    assert image.start == 0x200
    assert image.end == 0x203
    assert len(image) == 4


def test_empty_program_rejected() -> None:
    with pytest.raises(ProgramFormatError):
        load_program(b"")


def test_largest_program_fits_memory() -> None:
    image = load_program(bytes(MAX_PROGRAM_SIZE))
    assert image.end == 0xFFF


def test_oversized_program_rejected() -> None:
    with pytest.raises(ProgramFormatError):
        read_program(io.BytesIO(bytes(MAX_PROGRAM_SIZE + 1)))


def test_load_program_from_path(tmp_path) -> None:
    path = tmp_path / "pong.ch8"
    path.write_bytes(b"\x6A\x02")

    image = load_program_from_path(path)

    assert image.name == "pong"
    assert image.data == b"\x6A\x02"
    assert not image.compatibility_mode
