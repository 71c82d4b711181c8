from __future__ import annotations

import logging
import random
import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from termtype.core.clock import SessionClock
from termtype.core.keys import KeyEvent, KeyKind
from termtype.core.layout import Frame, layout, summary_frame
from termtype.core.metrics import MetricsSnapshot, final_sample, live_sample
from termtype.core.results import ResultStore, TestResult
from termtype.core.spec import Mode, TestSpec
from termtype.core.tracker import InputTracker
from termtype.core.words import WordQueue

logger = logging.getLogger(__name__)

# Longest wait for a key per tick. Also the rate at which the time limit and
# live WPM are re-checked while the user is idle.
POLL_INTERVAL = 0.05


class Terminal(Protocol):
    def size(self) -> Tuple[int, int]: ...

    def draw(self, frame: Frame) -> None: ...

    def poll(self, timeout: Optional[float]) -> Optional[KeyEvent]: ...


class SessionState(Enum):
    SETUP = "setup"
    RUNNING = "running"
    FINISHED = "finished"
    REVIEW = "review"


class TypingSession:
    """One typing test from the first drawn word to the summary screen.

    The session owns the word queue, the typed buffers and the clock. Each
    ``tick`` checks for an interrupt, checks whether the test is over, draws a
    frame, waits up to ``POLL_INTERVAL`` for one key and applies it. However
    the test ends (completion, Esc or interrupt) ``finish`` computes the
    result once and hands it to the result store.
    """

    def __init__(
        self,
        spec: TestSpec,
        store: Optional[ResultStore] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        interrupt: Optional[threading.Event] = None,
    ) -> None:
        self._spec = spec
        self._store = store
        self._rng = rng or random.Random()
        self._now = clock
        self._interrupt = interrupt or threading.Event()
        self._queue = WordQueue.draw(spec, self._rng)
        self._tracker = InputTracker(len(self._queue))
        self._clock = SessionClock()
        self._live = MetricsSnapshot()
        self._result: Optional[TestResult] = None
        self._state = SessionState.SETUP

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def spec(self) -> TestSpec:
        return self._spec

    @property
    def words(self) -> List[str]:
        return self._queue.words

    @property
    def buffers(self) -> List[str]:
        return self._tracker.buffers

    @property
    def cursor(self) -> int:
        return self._tracker.cursor

    @property
    def session_clock(self) -> SessionClock:
        return self._clock

    @property
    def live(self) -> MetricsSnapshot:
        """Most recent live metrics, refreshed at most once per second."""
        return self._live

    @property
    def result(self) -> Optional[TestResult]:
        return self._result

    def start(self) -> None:
        if self._state is SessionState.SETUP:
            self._state = SessionState.RUNNING
            logger.info(
                "Session started: %s, %d words queued (%s)",
                self._spec.result_key,
                len(self._queue),
                self._spec.language,
            )

    def is_complete(self, now: float) -> bool:
        if self._spec.mode is Mode.TIME:
            return self._clock.started and self._clock.elapsed(now) >= self._spec.time_limit
        return self._tracker.cursor >= self._spec.word_count

    def tick(self, terminal: Terminal) -> SessionState:
        """Advance the running test by one poll interval and return the new state."""
        if self._state is not SessionState.RUNNING:
            return self._state

        now = self._now()
        if self._interrupt.is_set():
            logger.info("Session interrupted")
            self.finish(now)
            return self._state
        if self.is_complete(now):
            self.finish(now)
            return self._state

        self._refresh_metrics(now)
        terminal.draw(self.frame(terminal.size(), now))
        event = terminal.poll(POLL_INTERVAL)
        if event is not None:
            self.handle(event, self._now())
        return self._state

    def handle(self, event: KeyEvent, now: float) -> None:
        """Apply one key to the running test."""
        if self._state is not SessionState.RUNNING:
            return
        if event.kind is KeyKind.CHAR and event.char:
            self._type(event.char, now)
        elif event.kind is KeyKind.SPACE:
            self._advance()
        elif event.kind is KeyKind.BACKSPACE:
            self._tracker.backspace()
        elif event.kind is KeyKind.RESTART:
            if self._spec.restart_enabled:
                self.restart()
        elif event.kind is KeyKind.ABORT:
            logger.info("Session aborted at word %d", self._tracker.cursor)
            self.finish(now)

    def _type(self, char: str, now: float) -> None:
        self._clock.start(now)
        self._tracker.push_char(char)
        if (
            self._spec.mode is Mode.WORDS
            and self._tracker.cursor == self._spec.word_count - 1
            and self._tracker.current == self._queue[self._tracker.cursor]
        ):
            # Last word typed exactly: no trailing space needed.
            self.finish(now)

    def _advance(self) -> None:
        if not self._tracker.advance():
            return
        if self._spec.mode is Mode.TIME:
            while self._queue.needs_replenish(self._tracker.cursor):
                self._tracker.extend(self._queue.replenish())

    def restart(self) -> None:
        self._queue = WordQueue.draw(self._spec, self._rng)
        self._tracker.reset(len(self._queue))
        self._clock.reset()
        self._live = MetricsSnapshot()
        logger.debug("Session restarted with %d words", len(self._queue))

    def _refresh_metrics(self, now: float) -> None:
        if self._clock.sample_due(now):
            self._live = live_sample(
                self._queue.words, self._tracker.buffers, self._tracker.cursor, self._clock, now
            )
            self._clock.mark_sampled(now)

    def status_line(self, now: float) -> str:
        if self._spec.mode is Mode.TIME:
            remaining = max(0, self._spec.time_limit - int(self._clock.elapsed(now)))
            return f"WPM: {self._live.wpm:.2f} | Time: {remaining}"
        return f"WPM: {self._live.wpm:.2f}"

    def frame(self, size: Tuple[int, int], now: Optional[float] = None) -> Frame:
        now = self._now() if now is None else now
        return layout(
            self._spec.layout,
            size,
            self._queue.words,
            self._tracker.buffers,
            self._tracker.cursor,
            self._spec.theme,
            self.status_line(now),
        )

    def finish(self, now: Optional[float] = None) -> TestResult:
        """End the test, store its result and return it. Later calls return the same result."""
        if self._result is not None:
            return self._result
        now = self._now() if now is None else now
        wpm, accuracy = final_sample(
            self._queue.words,
            self._tracker.buffers,
            self._tracker.cursor,
            self._clock,
            self._spec,
            now,
        )
        self._result = TestResult.now(wpm, accuracy)
        self._state = SessionState.FINISHED
        logger.info(
            "Session finished: %s wpm=%.2f accuracy=%.2f",
            self._spec.result_key,
            wpm,
            accuracy,
        )
        if self._store is not None:
            self._store.append(self._spec.result_key, self._result)
            best = self._store.best(self._spec.result_key)
            logger.info("Best for %s: %.2f wpm", self._spec.result_key, best.wpm)
        return self._result

    def run(self, terminal: Terminal) -> TestResult:
        """Run the test until it finishes and return its result."""
        self.start()
        while self.tick(terminal) is SessionState.RUNNING:
            pass
        return self.finish()

    def review(self, terminal: Terminal) -> bool:
        """Show the summary until the user picks restart (True) or exit (False).

        An interrupt still gets the summary drawn once before returning False.
        """
        if self._result is None:
            raise RuntimeError("Cannot review a session that has not finished")
        self._state = SessionState.REVIEW
        while True:
            terminal.draw(summary_frame(terminal.size(), self._result, self._spec.theme))
            if self._interrupt.is_set():
                return False
            event = terminal.poll(POLL_INTERVAL)
            if event is None:
                continue
            if event.kind is KeyKind.RESTART:
                return True
            if event.kind is KeyKind.ABORT:
                return False
