"""Tests for CHIP-8 machine assembly."""

from __future__ import annotations

import pytest

from pychip8.cpu import StackOverflowError
from pychip8.loader import load_program
from pychip8.system import MachineConfig, create_machine
from pychip8.video.font import FONT_START


def test_default_machine_shares_components() -> None:
    machine = create_machine(MachineConfig())

    assert machine.cpu.memory is machine.memory
    assert machine.cpu.display is machine.display
    assert machine.memory.length == 0x1000
    assert machine.memory.load8(FONT_START) == 0xF0
    assert machine.cpu.state.pc == 0x200


def test_program_image_installed() -> None:
    program = load_program(bytes([0x6A, 0x07]), compatibility_mode=True)
    machine = create_machine(MachineConfig(program=program))

    assert machine.cpu.compatibility_mode
    machine.step()
    assert machine.cpu.state.registers[0xA] == 0x07


def test_config_mode_overrides_program_image() -> None:
    program = load_program(bytes([0x6A, 0x07]), compatibility_mode=True)

    machine = create_machine(MachineConfig(program=program, compatibility_mode=False))
    assert not machine.cpu.compatibility_mode

    plain = load_program(bytes([0x6A, 0x07]))
    machine = create_machine(MachineConfig(program=plain, compatibility_mode=True))
    assert machine.cpu.compatibility_mode


def test_step_reads_keypad() -> None:
    # LD V0, K
    machine = create_machine(MachineConfig(program=load_program(bytes([0xF0, 0x0A]))))

    machine.step()
    assert machine.cpu.state.pc == 0x200

    machine.keypad.press("e")
    machine.step()
    assert machine.cpu.state.pc == 0x202
    assert machine.cpu.state.registers[0] == 0x6


def test_explicit_keys_override_keypad() -> None:
    machine = create_machine(MachineConfig(program=load_program(bytes([0xF0, 0x0A]))))
    machine.keypad.press("e")

    machine.step(frozenset({0x9}))

    assert machine.cpu.state.registers[0] == 0x9


def test_run_frame_ticks_timers_once() -> None:
    # LD V0, #05 ; LD ST, V0 ; JP #204
    program = load_program(bytes([0x60, 0x05, 0xF0, 0x18, 0x12, 0x04]))
    machine = create_machine(MachineConfig(program=program))

    assert machine.run_frame(10) is True
    assert machine.cpu.state.sound_timer == 4
    assert machine.cpu.step_count == 10


def test_reload_clears_display_and_keys() -> None:
    program = load_program(bytes([0xA0, 0x50, 0xD0, 0x05]))
    machine = create_machine(MachineConfig(program=program))
    machine.step()
    machine.step()
    machine.keypad.press("1")
    assert any(machine.display.data)

    machine.load(bytes([0x00, 0xE0]))

    assert not any(machine.display.data)
    assert machine.keypad.pressed() == frozenset()
    assert machine.memory.load8(0x200) == 0x00
    assert machine.memory.load8(0x201) == 0xE0


def test_stack_limit_configuration() -> None:
    program = load_program(bytes([0x22, 0x00]))
    machine = create_machine(MachineConfig(program=program, stack_limit=16))

    for _ in range(16):
        machine.step()
    with pytest.raises(StackOverflowError):
        machine.step()


def test_rng_seed_is_reproducible() -> None:
    program = load_program(bytes([0xC0, 0xFF, 0xC1, 0xFF]))
    first = create_machine(MachineConfig(program=program, rng_seed=99))
    second = create_machine(MachineConfig(program=program, rng_seed=99))

    for machine in (first, second):
        machine.step()
        machine.step()

    assert first.cpu.state.registers[:2] == second.cpu.state.registers[:2]
