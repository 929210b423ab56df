"""Main memory for the CHIP-8 emulator.

The interpreter sees a flat 4 KiB byte-addressable space. Every access is
bounds checked; touching an address outside the space terminates the session
with :class:`MemoryAccessError` instead of wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

MEMORY_SIZE = 0x1000


class MemoryAccessError(Exception):
    """Raised when an access falls outside the address space."""

    def __init__(self, address: int, length: int = 1) -> None:
        self.address = address
        self.length = length
        if length == 1:
            detail = f"address {address:#06x}"
        else:
            detail = f"range {address:#06x}-{address + length - 1:#06x}"
        super().__init__(f"{detail} outside memory {0:#06x}-{MEMORY_SIZE - 1:#06x}")


@dataclass
class Memory:
    """Simple byte-addressable memory region starting at address zero."""

    length: int = MEMORY_SIZE
    _data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("memory must have a positive length")
        self._data = bytearray(self.length)

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or length < 0 or address + length > self.length:
            raise MemoryAccessError(address, max(length, 1))

    def load8(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word."""

        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def load_block(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def store_block(self, address: int, values: Iterable[int]) -> None:
        payload = bytes(value & 0xFF for value in values)
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def clear(self) -> None:
        self._data[:] = bytes(self.length)
