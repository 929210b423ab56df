"""CHIP-8 machine assembly."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import AbstractSet, Optional

from pychip8.bus import Memory
from pychip8.cpu import CPU
from pychip8.io import Keypad
from pychip8.loader import ProgramImage
from pychip8.video import Display


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    program: Optional[ProgramImage] = None
    compatibility_mode: Optional[bool] = None
    stack_limit: Optional[int] = None
    rng_seed: Optional[int] = None


@dataclass
class Machine:
    """Aggregates the core components of the CHIP-8."""

    memory: Memory
    cpu: CPU
    display: Display
    keypad: Keypad

    def load(self, program: ProgramImage | bytes, compatibility_mode: bool | None = None) -> None:
        """Install ``program``; a :class:`ProgramImage` carries its own mode."""

        if isinstance(program, ProgramImage):
            data = program.data
            mode = program.compatibility_mode if compatibility_mode is None else compatibility_mode
        else:
            data = bytes(program)
            mode = bool(compatibility_mode)
        self.display.clear()
        self.keypad.reset()
        self.cpu.load(data, mode)

    def step(self, pressed_keys: AbstractSet[int] | None = None) -> None:
        """Execute one instruction with the keypad state (or ``pressed_keys``)."""

        keys = self.keypad.pressed() if pressed_keys is None else pressed_keys
        self.cpu.step(keys)

    def run_frame(self, steps: int) -> bool:
        """Run ``steps`` instructions, then tick the timers once.

        Returns the sound state reported by the timer tick.
        """

        for _ in range(steps):
            self.step()
        return self.cpu.tick_timers()


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    memory = Memory()
    display = Display()
    rng = random.Random(config.rng_seed)
    cpu = CPU(memory, display, stack_limit=config.stack_limit, rng=rng)
    machine = Machine(memory=memory, cpu=cpu, display=display, keypad=Keypad())

    if config.program is not None:
        machine.load(config.program, config.compatibility_mode)
    else:
        cpu.load(b"", bool(config.compatibility_mode))
    return machine
