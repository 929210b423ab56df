"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping

from pychip8.utils import debug_enabled, debug_log


# Host keys laid out as the COSMAC VIP keypad:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEYPAD_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    "[1]": "1",
    "[2]": "2",
    "[3]": "3",
    "[4]": "4",
}


@dataclass
class Keypad:
    """Tracks which of the sixteen logical keys are held down."""

    _active: Dict[int, int] = field(default_factory=dict)

    def press(self, key_name: str) -> None:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return
        self.press_key(key)

    def release(self, key_name: str) -> None:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return
        self.release_key(key)

    def press_key(self, key: int) -> None:
        key = _check_key(key)
        count = self._active.get(key, 0)
        self._active[key] = count + 1
        if debug_enabled("input"):
            debug_log("input", "key_press key=%X count=%d", key, count + 1)

    def release_key(self, key: int) -> None:
        key = _check_key(key)
        count = self._active.get(key, 0)
        if count == 0:
            return
        if count == 1:
            self._active.pop(key)
        else:
            self._active[key] = count - 1
        if debug_enabled("input"):
            debug_log("input", "key_release key=%X count=%d", key, self._active.get(key, 0))

    def is_pressed(self, key: int) -> bool:
        return key in self._active

    def pressed(self) -> FrozenSet[int]:
        return frozenset(self._active)

    def reset(self) -> None:
        self._active.clear()

    def lookup(self, key_name: str) -> int | None:
        name = key_name.lower()
        name = ALIAS_TABLE.get(name, name)
        return KEYPAD_TEMPLATE.get(name)


def _check_key(key: int) -> int:
    if not 0 <= key <= 0xF:
        raise ValueError(f"keypad key out of range: {key}")
    return key
