"""CPU package for the CHIP-8 emulator."""

from .core import (
    CPU,
    CPUError,
    CPUState,
    IllegalOpcodeError,
    StackOverflowError,
    StackUnderflowError,
)
from . import alu, opcodes

__all__ = [
    "CPU",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "alu",
    "opcodes",
]
