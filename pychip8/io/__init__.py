"""Input helpers for the CHIP-8 emulator."""

from .keypad import KEYPAD_TEMPLATE, Keypad

__all__ = [
    "KEYPAD_TEMPLATE",
    "Keypad",
]
