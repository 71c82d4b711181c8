"""Screen geometry for the typing test.

Everything here is pure: given the terminal size, the words, the typed
buffers and the cursor, produce a ``Frame`` of coloured glyphs and a cursor
coordinate. Drawing the frame is left to the terminal in ``termtype.ui``.

Both layout styles place words through ``wrap_positions``. Glyph placement,
the framed box's line count and the cursor coordinate all read from that one
generator, so the cursor always sits where the active word was drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from termtype.core.results import TestResult
from termtype.core.spec import RGB, ColorTheme, LayoutStyle

Size = Tuple[int, int]

# Framed layout geometry, in terminal cells.
BOX_WIDTH_RATIO = 0.8
BOX_MIN_WIDTH = 40
STATUS_BOX_TOP = 2
MAIN_BOX_TOP = STATUS_BOX_TOP + 4
BOX_PADDING = 2

SUMMARY_FOOTER = "Press 'Tab' to restart or 'Esc' to exit."


@dataclass(frozen=True)
class Glyph:
    x: int
    y: int
    char: str
    color: RGB


@dataclass
class Frame:
    glyphs: List[Glyph] = field(default_factory=list)
    cursor: Optional[Tuple[int, int]] = None


class _Canvas:
    def __init__(self, size: Size) -> None:
        self.width, self.height = size
        self.glyphs: List[Glyph] = []

    def put(self, x: int, y: int, char: str, color: RGB) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.glyphs.append(Glyph(x, y, char, color))

    def text(self, x: int, y: int, text: str, color: RGB) -> None:
        for offset, char in enumerate(text):
            if char != " ":
                self.put(x + offset, y, char, color)


def wrap_positions(
    words: Sequence[str],
    origin_x: int,
    origin_y: int,
    limit: int,
    line_step: int,
) -> Iterator[Tuple[int, int]]:
    """Yield the top-left cell of each word.

    A word that would cross column ``limit`` starts a new line ``line_step``
    rows further down, back at ``origin_x``.
    """
    x, y = origin_x, origin_y
    for word in words:
        if x + len(word) > limit:
            y += line_step
            x = origin_x
        yield x, y
        x += len(word) + 1


def word_colors(word: str, typed: str, active: bool, theme: ColorTheme) -> List[Tuple[str, RGB]]:
    """Characters to draw for one word and their colours.

    Typed positions are correct or incorrect. The untyped rest of the active
    word uses the default colour, of any other word the muted one. Overflow
    typed past the end of the active word is shown as incorrect.
    """
    cells: List[Tuple[str, RGB]] = []
    for index, char in enumerate(word):
        if index < len(typed):
            color = theme.correct if typed[index] == char else theme.incorrect
        else:
            color = theme.default if active else theme.muted
        cells.append((char, color))
    if active:
        cells.extend((char, theme.incorrect) for char in typed[len(word):])
    return cells


def _place_words(
    canvas: _Canvas,
    positions: Sequence[Tuple[int, int]],
    words: Sequence[str],
    buffers: Sequence[str],
    cursor: int,
    theme: ColorTheme,
) -> Optional[Tuple[int, int]]:
    caret: Optional[Tuple[int, int]] = None
    for index, ((x, y), word) in enumerate(zip(positions, words)):
        active = index == cursor
        for offset, (char, color) in enumerate(word_colors(word, buffers[index], active, theme)):
            canvas.put(x + offset, y, char, color)
        if active:
            caret = (x + len(buffers[index]), y)
    return caret


def _flowing(
    canvas: _Canvas,
    words: Sequence[str],
    buffers: Sequence[str],
    cursor: int,
    theme: ColorTheme,
    status: str,
) -> Frame:
    block_width = len(" ".join(words))
    start_x = max(0, canvas.width - block_width) // 2
    start_y = canvas.height // 2
    canvas.text(start_x, start_y - 2, status, theme.default)
    positions = list(wrap_positions(words, start_x, start_y, canvas.width, 2))
    caret = _place_words(canvas, positions, words, buffers, cursor, theme)
    return Frame(canvas.glyphs, caret)


def _box(canvas: _Canvas, x: int, y: int, width: int, inner_height: int, color: RGB) -> None:
    inner = max(0, width - 2)
    canvas.text(x, y, "┌" + "─" * inner + "┐", color)
    for row in range(1, inner_height + 1):
        canvas.put(x, y + row, "│", color)
        canvas.put(x + width - 1, y + row, "│", color)
    canvas.text(x, y + inner_height + 1, "└" + "─" * inner + "┘", color)


def framed_geometry(width: int) -> Tuple[int, int]:
    """Return ``(box_x, box_width)`` for a terminal ``width`` cells wide."""
    box_width = min(width, max(int(width * BOX_WIDTH_RATIO), BOX_MIN_WIDTH))
    return (width - box_width) // 2, box_width


def _framed(
    canvas: _Canvas,
    words: Sequence[str],
    buffers: Sequence[str],
    cursor: int,
    theme: ColorTheme,
    status: str,
) -> Frame:
    box_x, box_width = framed_geometry(canvas.width)

    _box(canvas, box_x, STATUS_BOX_TOP, box_width, 1, theme.default)
    canvas.text(box_x + BOX_PADDING, STATUS_BOX_TOP + 1, status, theme.default)

    text_x = box_x + BOX_PADDING
    text_y = MAIN_BOX_TOP + 1
    text_width = box_width - 2 * BOX_PADDING
    positions = list(wrap_positions(words, text_x, text_y, text_x + text_width, 1))
    lines = positions[-1][1] - text_y + 1 if positions else 1
    _box(canvas, box_x, MAIN_BOX_TOP, box_width, lines + 1, theme.default)

    caret = _place_words(canvas, positions, words, buffers, cursor, theme)
    return Frame(canvas.glyphs, caret)


def layout(
    style: LayoutStyle,
    size: Size,
    words: Sequence[str],
    buffers: Sequence[str],
    cursor: int,
    theme: ColorTheme,
    status: str = "",
) -> Frame:
    """Lay out one frame of the running test in the given style."""
    canvas = _Canvas(size)
    if style is LayoutStyle.FRAMED:
        return _framed(canvas, words, buffers, cursor, theme, status)
    return _flowing(canvas, words, buffers, cursor, theme, status)


def summary_frame(size: Size, result: TestResult, theme: ColorTheme) -> Frame:
    """Centred end-of-test summary."""
    canvas = _Canvas(size)
    lines = [
        "Typing test complete!",
        f"WPM: {result.wpm:.2f}",
        f"Accuracy: {result.accuracy:.2f}%",
        "",
        SUMMARY_FOOTER,
    ]
    for index, line in enumerate(lines):
        x = max(0, canvas.width - len(line)) // 2
        canvas.text(x, canvas.height // 2 + index, line, theme.default)
    return Frame(canvas.glyphs, None)
