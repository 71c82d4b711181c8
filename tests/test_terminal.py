"""Tests for termtype.ui.terminal – key translation."""

from __future__ import annotations

import curses

import pytest

from termtype.core.keys import ABORT, BACKSPACE, RESTART, SPACE, KeyEvent
from termtype.ui.terminal import translate_key


class TestTranslateKey:
    @pytest.mark.parametrize(
        "key,expected",
        [
            (" ", SPACE),
            ("\t", RESTART),
            ("\x1b", ABORT),
            ("\x7f", BACKSPACE),
            ("\b", BACKSPACE),
            (curses.KEY_BACKSPACE, BACKSPACE),
        ],
    )
    def test_special_keys(self, key, expected):
        assert translate_key(key) == expected

    def test_letter(self):
        assert translate_key("a") == KeyEvent.character("a")

    def test_non_ascii_letter(self):
        assert translate_key("ñ") == KeyEvent.character("ñ")

    @pytest.mark.parametrize("key", ["\n", "\x03", curses.KEY_LEFT, curses.KEY_RESIZE])
    def test_ignored(self, key):
        assert translate_key(key) is None
