from __future__ import annotations

import pytest

from pychip8.utils import debug


@pytest.fixture(autouse=True)
def _reset_categories():
    debug.reset_categories()
    yield
    debug.reset_categories()


def test_debug_disabled_by_default(monkeypatch, capsys):
    monkeypatch.delenv("CHIP8_DEBUG", raising=False)

    assert not debug.debug_enabled("cpu")
    debug.debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys):
    monkeypatch.setenv("CHIP8_DEBUG", "cpu, Input")

    assert debug.debug_enabled("cpu")
    assert debug.debug_enabled("input")
    assert not debug.debug_enabled("audio")

    debug.debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=0200\n"


def test_all_enables_everything(monkeypatch):
    monkeypatch.setenv("CHIP8_DEBUG", "all")
    assert debug.debug_enabled("perf")
