"""Shared fixtures: a scripted terminal and a fake monotonic clock."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

import pytest

from termtype.core.keys import ABORT, SPACE, KeyEvent
from termtype.core.layout import Frame, Glyph
from termtype.core.spec import Mode, TestSpec

WORDS = ("cat", "dog", "sun")


def keys_for(text: str) -> List[KeyEvent]:
    """Events a user typing ``text`` would produce."""
    return [SPACE if ch == " " else KeyEvent.character(ch) for ch in text]


def row_text(frame: Frame, y: int) -> str:
    """Text of row ``y`` with gaps filled by spaces."""
    cells = {g.x: g.char for g in frame.glyphs if g.y == y}
    if not cells:
        return ""
    return "".join(cells.get(x, " ") for x in range(max(cells) + 1))


def glyph_at(frame: Frame, x: int, y: int) -> Optional[Glyph]:
    for glyph in frame.glyphs:
        if glyph.x == x and glyph.y == y:
            return glyph
    return None


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTerminal:
    """Replays a scripted list of events (None = no key before the timeout).

    Every returned key moves the clock by ``key_step``; every empty poll by
    ``idle_step``. Once the script runs out ``exhausted`` is returned forever.
    """

    def __init__(
        self,
        events: Sequence[Optional[KeyEvent]] = (),
        clock: Optional[FakeClock] = None,
        size: Tuple[int, int] = (80, 24),
        key_step: float = 0.1,
        idle_step: float = 0.05,
        exhausted: Optional[KeyEvent] = ABORT,
    ) -> None:
        self.events: List[Optional[KeyEvent]] = list(events)
        self.clock = clock or FakeClock()
        self._size = size
        self.key_step = key_step
        self.idle_step = idle_step
        self.exhausted = exhausted
        self.frames: List[Frame] = []
        self.polls = 0

    def size(self) -> Tuple[int, int]:
        return self._size

    def draw(self, frame: Frame) -> None:
        self.frames.append(frame)

    def poll(self, timeout: Optional[float]) -> Optional[KeyEvent]:
        self.polls += 1
        event = self.events.pop(0) if self.events else self.exhausted
        self.clock.advance(self.key_step if event is not None else self.idle_step)
        return event


def make_spec(**overrides) -> TestSpec:
    values = dict(mode=Mode.WORDS, words=WORDS, word_count=3, time_limit=60)
    values.update(overrides)
    return TestSpec(**values)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)
