"""Run a small score-drawing program end to end."""

from __future__ import annotations

from pychip8.loader import load_program
from pychip8.system import MachineConfig, create_machine

# Splits V0 = 123 into digits and draws them with the built-in font.
SCORE_PROGRAM = bytes(
    [
        0x60, 0x7B,  # LD V0, #7B
        0xA3, 0x00,  # LD I, #300
        0xF0, 0x33,  # LD B, V0
        0xF2, 0x65,  # LD V2, [I]
        0x63, 0x00,  # LD V3, #00
        0x64, 0x00,  # LD V4, #00
        0xF0, 0x29,  # LD F, V0
        0xD3, 0x45,  # DRW V3, V4, #5
        0x73, 0x05,  # ADD V3, #05
        0xF1, 0x29,  # LD F, V1
        0xD3, 0x45,  # DRW V3, V4, #5
        0x73, 0x05,  # ADD V3, #05
        0xF2, 0x29,  # LD F, V2
        0xD3, 0x45,  # DRW V3, V4, #5
        0x12, 0x1C,  # JP #21C
    ]
)


def test_score_program_draws_digits() -> None:
    machine = create_machine(MachineConfig(program=load_program(SCORE_PROGRAM)))

    for _ in range(20):
        machine.step()

    state = machine.cpu.state
    assert state.registers[:3] == [1, 2, 3]
    assert state.index == 0x50 + 3 * 5
    assert state.registers[0xF] == 0
    assert state.pc == 0x21C

    display = machine.display
    # "1": top row is a single pixel in column 2.
    assert [x for x in range(4) if display.is_lit(x, 0)] == [2]
    # "2": solid top row starting at column 5.
    assert all(display.is_lit(x, 0) for x in range(5, 9))
    # "3": solid bottom row starting at column 10.
    assert all(display.is_lit(x, 4) for x in range(10, 14))
    assert not display.is_lit(15, 0)
