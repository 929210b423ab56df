"""Tests for CHIP-8 instruction decoding."""

from __future__ import annotations

import pytest

from pychip8.cpu.opcodes import AluOperation, Instruction, Opcode, OperandType, decode, mnemonic


def build_word(group: int, x: int = 0, y: int = 0, n: int = 0) -> int:
    return (group << 12) | (x << 8) | (y << 4) | n


@pytest.mark.parametrize(
    "group, opcode",
    [
        (0x1, Opcode.JUMP),
        (0x2, Opcode.CALL),
        (0xA, Opcode.SET_INDEX),
        (0xB, Opcode.JUMP_WITH_OFFSET),
        (0xC, Opcode.RANDOM),
        (0xD, Opcode.DRAW_SPRITE),
    ],
)
def test_simple_classes_recover_operand_fields(group: int, opcode: Opcode) -> None:
    word = build_word(group, 0x7, 0xC, 0x5)

    instruction = decode(word)

    assert instruction.opcode is opcode
    assert instruction.word == word
    assert instruction.x == 0x7
    assert instruction.y == 0xC
    assert instruction.n == 0x5
    assert instruction.nn == 0xC5
    assert instruction.nnn == 0x7C5


def test_full_word_literals() -> None:
    assert decode(0x00E0).opcode is Opcode.CLEAR_DISPLAY
    assert decode(0x00EE).opcode is Opcode.RETURN


def test_machine_code_routine_is_unknown() -> None:
    instruction = decode(0x0123)

    assert instruction.opcode is Opcode.UNKNOWN
    assert instruction.word == 0x0123


def test_skip_operand_types() -> None:
    assert decode(0x3A42).opcode is Opcode.SKIP_IF_EQUAL
    assert decode(0x3A42).operand_type is OperandType.IMMEDIATE
    assert decode(0x4A42).opcode is Opcode.SKIP_IF_NOT_EQUAL
    assert decode(0x4A42).operand_type is OperandType.IMMEDIATE
    assert decode(0x5AB0).opcode is Opcode.SKIP_IF_EQUAL
    assert decode(0x5AB0).operand_type is OperandType.REGISTER
    assert decode(0x9AB0).opcode is Opcode.SKIP_IF_NOT_EQUAL
    assert decode(0x9AB0).operand_type is OperandType.REGISTER


@pytest.mark.parametrize("word", [0x5AB1, 0x5ABF, 0x9AB3, 0x9ABE])
def test_register_skips_reject_nonzero_low_nibble(word: int) -> None:
    assert decode(word).opcode is Opcode.UNKNOWN


def test_immediate_arithmetic() -> None:
    load = decode(0x6A12)
    add = decode(0x7A12)

    assert load.opcode is Opcode.ARITHMETIC
    assert load.operand_type is OperandType.IMMEDIATE
    assert load.operation is AluOperation.SET
    assert add.operation is AluOperation.ADD
    assert add.operand_type is OperandType.IMMEDIATE


@pytest.mark.parametrize(
    "nibble, operation",
    [
        (0x0, AluOperation.SET),
        (0x1, AluOperation.OR),
        (0x2, AluOperation.AND),
        (0x3, AluOperation.XOR),
        (0x4, AluOperation.ADD),
        (0x5, AluOperation.SUB),
        (0x6, AluOperation.SHIFT_RIGHT),
        (0x7, AluOperation.SUB_REVERSE),
        (0xE, AluOperation.SHIFT_LEFT),
    ],
)
def test_register_alu_operations(nibble: int, operation: AluOperation) -> None:
    instruction = decode(build_word(0x8, 0x3, 0x4, nibble))

    assert instruction.opcode is Opcode.ARITHMETIC
    assert instruction.operand_type is OperandType.REGISTER
    assert instruction.operation is operation
    assert (instruction.x, instruction.y) == (0x3, 0x4)


@pytest.mark.parametrize("nibble", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
def test_undefined_alu_nibbles_are_unknown(nibble: int) -> None:
    assert decode(build_word(0x8, 1, 2, nibble)).opcode is Opcode.UNKNOWN


def test_key_instructions() -> None:
    assert decode(0xE59E).opcode is Opcode.SKIP_IF_KEY
    assert decode(0xE5A1).opcode is Opcode.SKIP_IF_NOT_KEY
    assert decode(0xE5A2).opcode is Opcode.UNKNOWN


@pytest.mark.parametrize(
    "low_byte, opcode",
    [
        (0x07, Opcode.READ_DELAY),
        (0x0A, Opcode.WAIT_FOR_KEY),
        (0x15, Opcode.SET_DELAY),
        (0x18, Opcode.SET_SOUND),
        (0x1E, Opcode.ADD_TO_INDEX),
        (0x29, Opcode.INDEX_TO_FONT),
        (0x33, Opcode.DECIMAL),
        (0x55, Opcode.SAVE_REGISTERS),
        (0x65, Opcode.LOAD_REGISTERS),
    ],
)
def test_misc_register_operations(low_byte: int, opcode: Opcode) -> None:
    instruction = decode(0xF900 | low_byte)

    assert instruction.opcode is opcode
    assert instruction.x == 0x9


def test_unrecognised_word_is_unknown() -> None:
    instruction = decode(0xFFFF)

    assert instruction.opcode is Opcode.UNKNOWN
    assert instruction.word == 0xFFFF


def test_every_opcode_names_a_handler() -> None:
    from pychip8.cpu import CPU

    for opcode in Opcode:
        assert callable(getattr(CPU, opcode.handler))


def test_mnemonics() -> None:
    assert mnemonic(decode(0x00E0)) == "CLS"
    assert mnemonic(decode(0x1234)) == "JP #234"
    assert mnemonic(decode(0x8AB4)) == "ADD VA, VB"
    assert mnemonic(decode(0x6A0F)) == "LD VA, #0F"
    assert mnemonic(decode(0xD125)) == "DRW V1, V2, #5"
    assert mnemonic(decode(0xFFFF)) == "DW #FFFF"


def test_arithmetic_without_operation_falls_back_to_data_word() -> None:
    instruction = Instruction(
        word=0x8AB4,
        opcode=Opcode.ARITHMETIC,
        x=0xA,
        y=0xB,
        n=0x4,
        nn=0xB4,
        nnn=0xAB4,
        operand_type=OperandType.REGISTER,
    )
    assert mnemonic(instruction) == "DW #8AB4"
