"""Tests for termtype.app – argument handling and startup errors."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from termtype import app
from termtype.core.settings import Settings
from termtype.core.spec import Difficulty, LayoutStyle, Mode


@pytest.fixture()
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every store at a temp dir and keep logging configuration out of the way."""
    monkeypatch.setattr("termtype.core.settings.data_dir", lambda: tmp_path)
    monkeypatch.setattr("termtype.core.results.data_dir", lambda: tmp_path)
    monkeypatch.setattr(app, "configure_logging", lambda log_file=None: None)
    return tmp_path


class TestOverrides:
    def test_no_arguments_keep_settings(self):
        args = app.build_parser().parse_args([])
        assert app.apply_overrides(Settings(), args) == Settings()

    def test_all_overrides(self):
        args = app.build_parser().parse_args(
            ["--mode", "time", "--time", "30", "--words", "10", "--difficulty", "hard",
             "--language", "spanish", "--layout", "boxes"]
        )
        s = app.apply_overrides(Settings(), args)
        assert s.game_mode is Mode.TIME
        assert s.default_time_limit == 30
        assert s.default_test_length == 10
        assert s.difficulty is Difficulty.HARD
        assert s.language == "spanish"
        assert s.layout_theme is LayoutStyle.FRAMED

    def test_invalid_mode_rejected(self):
        with pytest.raises(SystemExit):
            app.build_parser().parse_args(["--mode", "marathon"])


class TestRun:
    def test_list_languages(self, home: Path, capsys: pytest.CaptureFixture):
        assert app.run(["--list-languages"]) == 0
        out = capsys.readouterr().out.split()
        assert "english" in out
        assert "spanish" in out

    def test_configuration_error_exits_2(self, home: Path, capsys: pytest.CaptureFixture):
        assert app.run(["--words", "0"]) == 2
        assert "Word count" in capsys.readouterr().err

    def test_starts_curses_loop(self, home: Path, monkeypatch: pytest.MonkeyPatch):
        calls = []
        monkeypatch.setattr(app.curses, "wrapper", lambda fn, *args: calls.append((fn, args)))
        monkeypatch.setattr(app, "install_interrupt_handler", lambda interrupt: None)
        assert app.run(["--mode", "time", "--time", "15"]) == 0
        fn, (spec, store, interrupt) = calls[0]
        assert fn is app.play
        assert spec.result_key == "time_15_Easy"
        assert isinstance(interrupt, threading.Event)


class TestInterruptHandler:
    def test_sigint_sets_event(self, monkeypatch: pytest.MonkeyPatch):
        installed = {}
        monkeypatch.setattr(app.signal, "signal", lambda sig, handler: installed.update({sig: handler}))
        interrupt = threading.Event()
        app.install_interrupt_handler(interrupt)
        installed[app.signal.SIGINT](app.signal.SIGINT, None)
        assert interrupt.is_set()
