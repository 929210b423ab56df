"""CHIP-8 interpreter core: fetch, decode and execute."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import AbstractSet, List

from pychip8.bus import Memory
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Display
from pychip8.video.font import DEFAULT_FONT, FONT_START, glyph_address

from . import alu
from .opcodes import Instruction, OperandType, decode, mnemonic


class CPUError(Exception):
    """Base error for fatal interpreter failures."""


class IllegalOpcodeError(CPUError):
    """Raised when the CPU fetches a word that decodes to no instruction."""

    def __init__(self, word: int, address: int | None = None) -> None:
        self.word = word & 0xFFFF
        self.address = address
        where = "" if address is None else f" at {address:#05x}"
        super().__init__(f"unknown instruction {self.word:#06x}{where}")


class StackUnderflowError(CPUError):
    """Raised on a return with an empty call stack."""


class StackOverflowError(CPUError):
    """Raised when a call exceeds the configured stack limit."""


PROGRAM_START = 0x200
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    registers: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    pc: int = PROGRAM_START
    index: int = 0x000
    delay_timer: int = 0
    sound_timer: int = 0
    stack: List[int] = field(default_factory=list)

    def clone(self) -> "CPUState":
        return CPUState(
            list(self.registers),
            self.pc,
            self.index,
            self.delay_timer,
            self.sound_timer,
            list(self.stack),
        )


@dataclass
class CPU:
    """Interpreter state engine; executes one instruction per :meth:`step`."""

    memory: Memory = field(default_factory=Memory)
    display: Display = field(default_factory=Display)
    stack_limit: int | None = None
    rng: random.Random = field(default_factory=random.Random)

    state: CPUState = field(default_factory=CPUState)
    compatibility_mode: bool = False
    step_count: int = 0
    waiting_for_key: bool = False
    _pressed: AbstractSet[int] = field(default=frozenset(), init=False, repr=False)

    def load(self, program: bytes, compatibility_mode: bool = False) -> None:
        """Reset the machine and install the font and ``program`` at 0x200."""

        self.memory.clear()
        self.state = CPUState()
        self.step_count = 0
        self.waiting_for_key = False
        self.compatibility_mode = compatibility_mode
        self.memory.store_block(FONT_START, DEFAULT_FONT)
        self.memory.store_block(PROGRAM_START, program)
        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "loaded %d bytes compatibility=%s",
                len(program),
                compatibility_mode,
            )

    def step(self, pressed_keys: AbstractSet[int] = frozenset()) -> None:
        """Execute a single fetch-decode-execute cycle."""

        pc_before = self.state.pc
        word = self.memory.load16(pc_before)
        self.state.pc = (pc_before + 2) & 0xFFFF
        instruction = decode(word)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x word=%04x %s", pc_before, word, mnemonic(instruction))

        self._pressed = pressed_keys
        self.waiting_for_key = False
        handler = getattr(self, instruction.opcode.handler)
        handler(instruction)
        self.step_count += 1

    def tick_timers(self) -> bool:
        """Decrement both timers and return whether the sound timer is still running."""

        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1
        return state.sound_timer > 0

    @property
    def sound_active(self) -> bool:
        return self.state.sound_timer > 0

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_clear_display(self, _: Instruction) -> None:
        self.display.clear()

    def op_draw_sprite(self, instruction: Instruction) -> None:
        registers = self.state.registers
        sprite = self.memory.load_block(self.state.index, instruction.n)
        collision = self.display.draw_sprite(
            registers[instruction.x],
            registers[instruction.y],
            sprite,
        )
        registers[FLAG_REGISTER] = 1 if collision else 0

    def op_jump(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn

    def op_jump_with_offset(self, instruction: Instruction) -> None:
        register = 0 if self.compatibility_mode else instruction.x
        self.state.pc = instruction.nnn + self.state.registers[register]

    def op_call(self, instruction: Instruction) -> None:
        stack = self.state.stack
        if self.stack_limit is not None and len(stack) >= self.stack_limit:
            raise StackOverflowError(
                f"call to {instruction.nnn:#05x} exceeds stack limit {self.stack_limit}"
            )
        stack.append(self.state.pc)
        self.state.pc = instruction.nnn

    def op_return(self, _: Instruction) -> None:
        if not self.state.stack:
            raise StackUnderflowError(
                f"return at {(self.state.pc - 2) & 0xFFFF:#05x} with empty call stack"
            )
        self.state.pc = self.state.stack.pop()

    def op_skip_if_equal(self, instruction: Instruction) -> None:
        if self._lhs(instruction) == self._rhs(instruction):
            self._skip()

    def op_skip_if_not_equal(self, instruction: Instruction) -> None:
        if self._lhs(instruction) != self._rhs(instruction):
            self._skip()

    def op_arithmetic(self, instruction: Instruction) -> None:
        operation = instruction.operation
        if operation is None:
            raise IllegalOpcodeError(instruction.word, (self.state.pc - 2) & 0xFFFF)
        result, flag = alu.perform(
            self._lhs(instruction),
            self._rhs(instruction),
            operation,
            self.compatibility_mode,
        )
        registers = self.state.registers
        registers[instruction.x] = result
        # VF as destination: the flag write lands last.
        if flag is not None:
            registers[FLAG_REGISTER] = flag

    def op_set_index(self, instruction: Instruction) -> None:
        self.state.index = instruction.nnn

    def op_add_to_index(self, instruction: Instruction) -> None:
        self.state.index = (self.state.index + self.state.registers[instruction.x]) & 0xFFFF

    def op_index_to_font(self, instruction: Instruction) -> None:
        self.state.index = glyph_address(self.state.registers[instruction.x])

    def op_set_delay(self, instruction: Instruction) -> None:
        self.state.delay_timer = self.state.registers[instruction.x]

    def op_set_sound(self, instruction: Instruction) -> None:
        self.state.sound_timer = self.state.registers[instruction.x]

    def op_read_delay(self, instruction: Instruction) -> None:
        self.state.registers[instruction.x] = self.state.delay_timer

    def op_skip_if_key(self, instruction: Instruction) -> None:
        if self._key_down(instruction):
            self._skip()

    def op_skip_if_not_key(self, instruction: Instruction) -> None:
        if not self._key_down(instruction):
            self._skip()

    def op_wait_for_key(self, instruction: Instruction) -> None:
        if self._pressed:
            self.state.registers[instruction.x] = min(self._pressed) & 0xF
            return
        # Re-run this instruction on the next step until a key is down.
        self.state.pc = (self.state.pc - 2) & 0xFFFF
        self.waiting_for_key = True

    def op_decimal(self, instruction: Instruction) -> None:
        value = self.state.registers[instruction.x]
        digits = (value // 100, (value // 10) % 10, value % 10)
        self.memory.store_block(self.state.index, digits)

    def op_save_registers(self, instruction: Instruction) -> None:
        count = instruction.x + 1
        self.memory.store_block(self.state.index, self.state.registers[:count])
        self.state.index = (self.state.index + count) & 0xFFFF

    def op_load_registers(self, instruction: Instruction) -> None:
        count = instruction.x + 1
        values = self.memory.load_block(self.state.index, count)
        self.state.registers[:count] = list(values)
        self.state.index = (self.state.index + count) & 0xFFFF

    def op_random(self, instruction: Instruction) -> None:
        self.state.registers[instruction.x] = self.rng.randrange(256) & instruction.nn

    def op_unknown(self, instruction: Instruction) -> None:
        raise IllegalOpcodeError(instruction.word, (self.state.pc - 2) & 0xFFFF)

    # ------------------------------------------------------------------
    # Helpers

    def _lhs(self, instruction: Instruction) -> int:
        return self.state.registers[instruction.x]

    def _rhs(self, instruction: Instruction) -> int:
        if instruction.operand_type is OperandType.REGISTER:
            return self.state.registers[instruction.y]
        return instruction.nn

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _key_down(self, instruction: Instruction) -> bool:
        return (self.state.registers[instruction.x] & 0xF) in self._pressed