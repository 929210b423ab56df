"""Instruction decoding for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Mapping


class OperandType(Enum):
    """Where the right-hand operand of a compare/ALU instruction comes from."""

    REGISTER = auto()
    IMMEDIATE = auto()


class AluOperation(Enum):
    """Two-operand operations computed by :mod:`pychip8.cpu.alu`."""

    SET = auto()
    ADD = auto()
    SUB = auto()
    SUB_REVERSE = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    SHIFT_LEFT = auto()
    SHIFT_RIGHT = auto()


class Opcode(Enum):
    """Recognised opcode classes; each value names the CPU handler method."""

    CLEAR_DISPLAY = "op_clear_display"
    DRAW_SPRITE = "op_draw_sprite"
    RETURN = "op_return"
    JUMP = "op_jump"
    JUMP_WITH_OFFSET = "op_jump_with_offset"
    CALL = "op_call"
    SKIP_IF_EQUAL = "op_skip_if_equal"
    SKIP_IF_NOT_EQUAL = "op_skip_if_not_equal"
    ARITHMETIC = "op_arithmetic"
    SET_INDEX = "op_set_index"
    ADD_TO_INDEX = "op_add_to_index"
    INDEX_TO_FONT = "op_index_to_font"
    SET_DELAY = "op_set_delay"
    SET_SOUND = "op_set_sound"
    READ_DELAY = "op_read_delay"
    SKIP_IF_KEY = "op_skip_if_key"
    SKIP_IF_NOT_KEY = "op_skip_if_not_key"
    WAIT_FOR_KEY = "op_wait_for_key"
    DECIMAL = "op_decimal"
    SAVE_REGISTERS = "op_save_registers"
    LOAD_REGISTERS = "op_load_registers"
    RANDOM = "op_random"
    UNKNOWN = "op_unknown"

    @property
    def handler(self) -> str:
        return self.value


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction word.

    All operand fields are extracted for every word; handlers read only the
    ones their opcode uses.
    """

    word: int
    opcode: Opcode
    x: int
    y: int
    n: int
    nn: int
    nnn: int
    operand_type: OperandType | None = None
    operation: AluOperation | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.word <= 0xFFFF:
            raise ValueError(f"instruction word out of range: {self.word}")


_ALU_BY_NIBBLE: Final[Mapping[int, AluOperation]] = {
    0x0: AluOperation.SET,
    0x1: AluOperation.OR,
    0x2: AluOperation.AND,
    0x3: AluOperation.XOR,
    0x4: AluOperation.ADD,
    0x5: AluOperation.SUB,
    0x6: AluOperation.SHIFT_RIGHT,
    0x7: AluOperation.SUB_REVERSE,
    0xE: AluOperation.SHIFT_LEFT,
}

_KEY_OPS: Final[Mapping[int, Opcode]] = {
    0x9E: Opcode.SKIP_IF_KEY,
    0xA1: Opcode.SKIP_IF_NOT_KEY,
}

_MISC_OPS: Final[Mapping[int, Opcode]] = {
    0x07: Opcode.READ_DELAY,
    0x0A: Opcode.WAIT_FOR_KEY,
    0x15: Opcode.SET_DELAY,
    0x18: Opcode.SET_SOUND,
    0x1E: Opcode.ADD_TO_INDEX,
    0x29: Opcode.INDEX_TO_FONT,
    0x33: Opcode.DECIMAL,
    0x55: Opcode.SAVE_REGISTERS,
    0x65: Opcode.LOAD_REGISTERS,
}

_SIMPLE_CLASSES: Final[Mapping[int, Opcode]] = {
    0x1: Opcode.JUMP,
    0x2: Opcode.CALL,
    0xA: Opcode.SET_INDEX,
    0xB: Opcode.JUMP_WITH_OFFSET,
    0xC: Opcode.RANDOM,
    0xD: Opcode.DRAW_SPRITE,
}


def _classify(word: int) -> tuple[Opcode, OperandType | None, AluOperation | None]:
    if word == 0x00E0:
        return Opcode.CLEAR_DISPLAY, None, None
    if word == 0x00EE:
        return Opcode.RETURN, None, None

    group = word >> 12
    low_nibble = word & 0xF
    low_byte = word & 0xFF

    simple = _SIMPLE_CLASSES.get(group)
    if simple is not None:
        return simple, None, None
    if group == 0x3:
        return Opcode.SKIP_IF_EQUAL, OperandType.IMMEDIATE, None
    if group == 0x4:
        return Opcode.SKIP_IF_NOT_EQUAL, OperandType.IMMEDIATE, None
    if group == 0x5 and low_nibble == 0x0:
        return Opcode.SKIP_IF_EQUAL, OperandType.REGISTER, None
    if group == 0x9 and low_nibble == 0x0:
        return Opcode.SKIP_IF_NOT_EQUAL, OperandType.REGISTER, None
    if group == 0x6:
        return Opcode.ARITHMETIC, OperandType.IMMEDIATE, AluOperation.SET
    if group == 0x7:
        return Opcode.ARITHMETIC, OperandType.IMMEDIATE, AluOperation.ADD
    if group == 0x8 and low_nibble in _ALU_BY_NIBBLE:
        return Opcode.ARITHMETIC, OperandType.REGISTER, _ALU_BY_NIBBLE[low_nibble]
    if group == 0xE and low_byte in _KEY_OPS:
        return _KEY_OPS[low_byte], None, None
    if group == 0xF and low_byte in _MISC_OPS:
        return _MISC_OPS[low_byte], None, None
    return Opcode.UNKNOWN, None, None


def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word into an :class:`Instruction`."""

    word &= 0xFFFF
    opcode, operand_type, operation = _classify(word)
    return Instruction(
        word=word,
        opcode=opcode,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
        operand_type=operand_type,
        operation=operation,
    )


_ALU_MNEMONICS: Final[Mapping[AluOperation, str]] = {
    AluOperation.SET: "LD",
    AluOperation.ADD: "ADD",
    AluOperation.SUB: "SUB",
    AluOperation.SUB_REVERSE: "SUBN",
    AluOperation.OR: "OR",
    AluOperation.AND: "AND",
    AluOperation.XOR: "XOR",
    AluOperation.SHIFT_LEFT: "SHL",
    AluOperation.SHIFT_RIGHT: "SHR",
}


def mnemonic(instruction: Instruction) -> str:
    """Return assembler-style text for ``instruction`` (used by traces)."""

    op = instruction.opcode
    x = f"V{instruction.x:X}"
    y = f"V{instruction.y:X}"
    nn = f"#{instruction.nn:02X}"
    nnn = f"#{instruction.nnn:03X}"

    if op is Opcode.CLEAR_DISPLAY:
        return "CLS"
    if op is Opcode.RETURN:
        return "RET"
    if op is Opcode.JUMP:
        return f"JP {nnn}"
    if op is Opcode.JUMP_WITH_OFFSET:
        return f"JP V0, {nnn}"
    if op is Opcode.CALL:
        return f"CALL {nnn}"
    if op in (Opcode.SKIP_IF_EQUAL, Opcode.SKIP_IF_NOT_EQUAL):
        name = "SE" if op is Opcode.SKIP_IF_EQUAL else "SNE"
        rhs = y if instruction.operand_type is OperandType.REGISTER else nn
        return f"{name} {x}, {rhs}"
    if op is Opcode.ARITHMETIC and instruction.operation is not None:
        name = _ALU_MNEMONICS[instruction.operation]
        rhs = y if instruction.operand_type is OperandType.REGISTER else nn
        return f"{name} {x}, {rhs}"
    if op is Opcode.SET_INDEX:
        return f"LD I, {nnn}"
    if op is Opcode.ADD_TO_INDEX:
        return f"ADD I, {x}"
    if op is Opcode.INDEX_TO_FONT:
        return f"LD F, {x}"
    if op is Opcode.SET_DELAY:
        return f"LD DT, {x}"
    if op is Opcode.SET_SOUND:
        return f"LD ST, {x}"
    if op is Opcode.READ_DELAY:
        return f"LD {x}, DT"
    if op is Opcode.SKIP_IF_KEY:
        return f"SKP {x}"
    if op is Opcode.SKIP_IF_NOT_KEY:
        return f"SKNP {x}"
    if op is Opcode.WAIT_FOR_KEY:
        return f"LD {x}, K"
    if op is Opcode.DECIMAL:
        return f"LD B, {x}"
    if op is Opcode.SAVE_REGISTERS:
        return f"LD [I], {x}"
    if op is Opcode.LOAD_REGISTERS:
        return f"LD {x}, [I]"
    if op is Opcode.RANDOM:
        return f"RND {x}, {nn}"
    if op is Opcode.DRAW_SPRITE:
        return f"DRW {x}, {y}, #{instruction.n:X}"
    return f"DW #{instruction.word:04X}"
