"""Command-line entry point for the Python CHIP-8 emulator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 emulator (Python)",
    )
    parser.add_argument(
        "program",
        type=Path,
        help="Path to a raw CHIP-8 program image",
    )
    parser.add_argument(
        "--compat",
        action="store_true",
        help="Use the historical COSMAC VIP behaviour for BNNN and the shift instructions",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=12,
        help="Integer window scale factor (default: 12)",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=10,
        help="Instructions executed per 60 Hz frame (default: 10)",
    )
    parser.add_argument(
        "--no-fade",
        action="store_true",
        help="Turn pixels off immediately instead of fading them out",
    )
    parser.add_argument(
        "--stack-limit",
        type=int,
        default=None,
        help="Maximum call depth before a stack overflow stops emulation",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the emulator in fullscreen mode",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.speed <= 0:
        parser.error("--speed must be positive")

    config = AppConfig(
        program_path=args.program,
        compatibility_mode=args.compat,
        scale=args.scale,
        fullscreen=args.fullscreen,
        steps_per_frame=args.speed,
        fade=not args.no_fade,
        stack_limit=args.stack_limit,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
