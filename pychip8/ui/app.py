"""Pygame frontend for the CHIP-8 emulator."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import SquareWaveBeeper
from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError
from pychip8.cpu.opcodes import decode, mnemonic
from pychip8.loader import ProgramFormatError, load_program_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, MONOCHROME, Renderer
from pychip8.utils import TraceRecorder, debug_enabled, debug_log


_FRAME_RATE = 60
_STEPS_PER_FRAME = 10


@dataclass
class AppConfig:
    """Configuration for the emulator frontend."""

    program_path: Optional[Path] = None
    compatibility_mode: bool = False
    scale: int = 12
    fullscreen: bool = False
    steps_per_frame: int = _STEPS_PER_FRAME
    frame_rate: int = _FRAME_RATE
    fade: bool = True
    stack_limit: Optional[int] = None


class Chip8App:
    """Thin wrapper around the Pygame event loop.

    Each frame polls input, runs ``steps_per_frame`` instructions, ticks the
    timers once, updates the beeper, fades and repaints the display.
    """

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.steps_per_frame <= 0:
            raise ValueError("steps_per_frame must be positive")
        self._config = config
        self._running = False
        self._paused = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._renderer = Renderer(MONOCHROME)
        self._debug_overlay = debug_enabled("overlay")
        self._overlay_font = None
        self._perf_enabled = debug_enabled("perf")
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)
        self._frame_counter = 0

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        if self._config.program_path is None:
            raise RuntimeError("program image is required; pass a program path")
        machine = self._create_machine(self._config.program_path)
        self._machine = machine

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.program_path.name}")

        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - best-effort path
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)

        mixer_state = pygame.mixer.get_init()
        if mixer_state is not None:
            try:
                self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
            except RuntimeError as exc:
                self._beeper = None
                if debug_enabled("audio"):
                    debug_log("audio", "beeper_init_failed=%s", exc)
        elif debug_enabled("audio"):
            debug_log("audio", "mixer_unavailable")

        scale = self._config.scale
        display_width = DISPLAY_WIDTH * scale
        display_height = DISPLAY_HEIGHT * scale
        overlay_width = 24 * 8 if self._debug_overlay else 0
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((display_width + overlay_width, display_height), flags)

        clock = pygame.time.Clock()
        self._running = True

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                        self._paused = not self._paused
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame.key.name(event.key), pressed=False)

                frame_start = time.perf_counter()
                if not self._paused:
                    sound_on = self._step_frame(machine)
                    if self._beeper is not None:
                        self._beeper.set_state(sound_on)

                frame = self._render_frame(machine)
                screen.blit(frame.to_surface(), (0, 0))
                if self._debug_overlay and overlay_width > 0:
                    overlay = self._draw_overlay(pygame, machine, overlay_width, display_height)
                    screen.blit(overlay, (display_width, 0))
                pygame.display.flip()

                if self._perf_enabled:
                    elapsed = time.perf_counter() - frame_start
                    debug_log(
                        "perf",
                        "frame=%d steps=%d frame_ms=%.3f",
                        self._frame_counter,
                        machine.cpu.step_count,
                        elapsed * 1000.0,
                    )

                clock.tick(self._config.frame_rate)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def _create_machine(self, program_path: Path) -> Machine:
        try:
            program = load_program_from_path(
                program_path,
                compatibility_mode=self._config.compatibility_mode,
            )
        except FileNotFoundError as exc:
            raise RuntimeError(f"Program file not found: {program_path}") from exc
        except ProgramFormatError as exc:
            raise RuntimeError(f"Failed to load program {program_path}: {exc}") from exc

        return create_machine(
            MachineConfig(
                program=program,
                compatibility_mode=self._config.compatibility_mode,
                stack_limit=self._config.stack_limit,
            )
        )

    def _handle_key_event(self, name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        if pressed:
            machine.keypad.press(name)
        else:
            machine.keypad.release(name)

    def _step_frame(self, machine: Machine) -> bool:
        """Run one frame's worth of instructions and tick the timers."""

        cpu = machine.cpu
        trace = self._trace_recorder
        try:
            for _ in range(self._config.steps_per_frame):
                if trace is not None:
                    state_before = cpu.state.clone()
                    word = machine.memory.load16(state_before.pc)
                machine.step()
                if trace is not None:
                    trace.record_step(
                        state_before,
                        word,
                        mnemonic=mnemonic(decode(word)),
                        waiting=cpu.waiting_for_key,
                    )
        except (CPUError, MemoryAccessError) as exc:
            self._running = False
            if trace is not None:
                trace.dump("trace", 64)
            raise RuntimeError(f"emulation stopped at pc={cpu.state.pc:04X}: {exc}") from exc
        return cpu.tick_timers()

    def _render_frame(self, machine: Machine):
        """Render the framebuffer, then advance or drop fading pixels."""

        display = machine.display
        if not self._config.fade:
            display.drop_fading()
        frame = self._renderer.render(display.data, scale=self._config.scale)
        if self._config.fade:
            display.fade_pixels()
        return frame

    def _draw_overlay(self, pygame, machine: Machine, width: int, height: int):
        surface = pygame.Surface((width, height))
        surface.fill((0, 0, 0))

        font_size = 12
        if self._overlay_font is None:
            pygame.font.init()
            font_name = pygame.font.match_font("menlo,dejavusansmono,couriernew,consolas,monospace")
            if not font_name:
                font_name = pygame.font.get_default_font()
            self._overlay_font = pygame.font.Font(font_name, font_size)
        font_obj = self._overlay_font

        y = 4
        for text in _overlay_lines(machine):
            rendered = font_obj.render(text, False, (255, 255, 255))
            surface.blit(rendered, (4, y))
            y += font_size + 2
            if y > height:
                break
        return surface


def _overlay_lines(machine: Machine) -> list[str]:
    state = machine.cpu.state
    lines = [
        f"PC  {state.pc:04X}",
        f"I   {state.index:04X}",
        f"SP  {len(state.stack):02d}",
        f"DT  {state.delay_timer:02X}  ST {state.sound_timer:02X}",
        " ",
    ]
    for row in range(0, 16, 2):
        lines.append(
            f"V{row:X} {state.registers[row]:02X}  V{row + 1:X} {state.registers[row + 1]:02X}"
        )
    keys = "".join(f"{key:X}" for key in sorted(machine.keypad.pressed()))
    lines.append(" ")
    lines.append(f"KEYS {keys or '-'}")
    return lines
