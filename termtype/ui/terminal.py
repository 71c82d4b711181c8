"""curses-backed terminal: draws frames and turns key presses into KeyEvents."""

from __future__ import annotations

import curses
import logging
from typing import Dict, Optional, Tuple, Union

from termtype.core.keys import ABORT, BACKSPACE, RESTART, SPACE, KeyEvent
from termtype.core.layout import Frame
from termtype.ui.colors import RGB, nearest_curses_color, rgb_to_hex

logger = logging.getLogger(__name__)

BACKSPACE_KEYS = {"\x7f", "\b"}


def translate_key(key: Union[str, int]) -> Optional[KeyEvent]:
    """Map a ``get_wch`` result to a KeyEvent, or None for keys the test ignores."""
    if isinstance(key, int):
        if key == curses.KEY_BACKSPACE:
            return BACKSPACE
        return None
    if key == " ":
        return SPACE
    if key == "\t":
        return RESTART
    if key == "\x1b":
        return ABORT
    if key in BACKSPACE_KEYS:
        return BACKSPACE
    if len(key) == 1 and key.isprintable():
        return KeyEvent.character(key)
    return None


def _set_cursor_visible(visible: bool) -> None:
    try:
        curses.curs_set(1 if visible else 0)
    except curses.error:
        # not every terminal can hide the cursor
        pass


class CursesTerminal:
    """Draws Frames on a curses window and polls it for keys.

    Must be used inside ``curses.wrapper`` so the terminal is restored on
    every exit path.
    """

    def __init__(self, stdscr: "curses.window") -> None:
        self._stdscr = stdscr
        self._pairs: Dict[int, int] = {}
        self._colors = 0
        if curses.has_colors():
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                logger.debug("Terminal does not support default colours")
            self._colors = curses.COLORS
        self._stdscr.keypad(True)

    def size(self) -> Tuple[int, int]:
        height, width = self._stdscr.getmaxyx()
        return width, height

    def _attr(self, color: RGB) -> int:
        if not self._colors:
            return curses.A_NORMAL
        number = nearest_curses_color(color, self._colors)
        pair = self._pairs.get(number)
        if pair is None:
            pair = len(self._pairs) + 1
            curses.init_pair(pair, number, -1)
            logger.debug("Colour %s drawn as curses colour %d", rgb_to_hex(color), number)
            self._pairs[number] = pair
        return curses.color_pair(pair)

    def draw(self, frame: Frame) -> None:
        width, height = self.size()
        self._stdscr.erase()
        for glyph in frame.glyphs:
            # The bottom-right cell cannot be written without scrolling.
            if glyph.x >= width or glyph.y >= height or (glyph.x, glyph.y) == (width - 1, height - 1):
                continue
            self._stdscr.addstr(glyph.y, glyph.x, glyph.char, self._attr(glyph.color))
        if frame.cursor is not None:
            x, y = frame.cursor
            if 0 <= x < width and 0 <= y < height:
                _set_cursor_visible(True)
                self._stdscr.move(y, x)
            else:
                _set_cursor_visible(False)
        else:
            _set_cursor_visible(False)
        self._stdscr.refresh()

    def poll(self, timeout: Optional[float]) -> Optional[KeyEvent]:
        """Wait up to ``timeout`` seconds (forever if None) for one key."""
        self._stdscr.timeout(-1 if timeout is None else int(timeout * 1000))
        try:
            key = self._stdscr.get_wch()
        except curses.error:
            # no input before the timeout
            return None
        return translate_key(key)
