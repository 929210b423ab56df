"""Bus-related helpers for the CHIP-8 emulator."""

from .memory import MEMORY_SIZE, Memory, MemoryAccessError

__all__ = [
    "MEMORY_SIZE",
    "Memory",
    "MemoryAccessError",
]
