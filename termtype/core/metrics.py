"""Words-per-minute and accuracy for a typing test.

Counts are always derived fresh from the queue and the typed buffers rather
than accumulated keystroke by keystroke, so a backspace or a restart can never
leave them out of step:

  * **correct** – typed characters matching the target at the same position.
  * **incorrect** – mismatching characters plus anything typed past the end
    of the target word.
  * **WPM** – (correct / 5) / elapsed minutes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from termtype.core.clock import SessionClock
from termtype.core.spec import Mode, TestSpec


@dataclass(frozen=True)
class MetricsSnapshot:
    correct: int = 0
    incorrect: int = 0
    wpm: float = 0.0


def count_characters(words: Sequence[str], buffers: Sequence[str], upto: int) -> Tuple[int, int]:
    """Return ``(correct, incorrect)`` over words ``0..upto`` inclusive."""
    correct = 0
    incorrect = 0
    for target, typed in zip(words[: upto + 1], buffers[: upto + 1]):
        matches = sum(1 for a, b in zip(typed, target) if a == b)
        correct += matches
        incorrect += min(len(typed), len(target)) - matches
        incorrect += max(0, len(typed) - len(target))
    return correct, incorrect


def calculate_wpm(correct_chars: int, seconds: float) -> float:
    """Words per minute for ``correct_chars`` over ``seconds``, or 0.0 if no time passed."""
    if seconds <= 0:
        return 0.0
    return (correct_chars / 5.0) / (seconds / 60.0)


def calculate_accuracy(correct: int, incorrect: int) -> float:
    """Correct share of typed characters as a percentage; 100.0 when nothing was typed."""
    total = correct + incorrect
    if total == 0:
        return 100.0
    return (correct / total) * 100.0


def live_sample(
    words: Sequence[str],
    buffers: Sequence[str],
    cursor: int,
    clock: SessionClock,
    now: float,
) -> MetricsSnapshot:
    correct, incorrect = count_characters(words, buffers, cursor)
    wpm = calculate_wpm(correct, clock.elapsed(now)) if clock.started else 0.0
    return MetricsSnapshot(correct=correct, incorrect=incorrect, wpm=wpm)


def final_sample(
    words: Sequence[str],
    buffers: Sequence[str],
    cursor: int,
    clock: SessionClock,
    spec: TestSpec,
    now: float,
) -> Tuple[float, float]:
    """Authoritative ``(wpm, accuracy)`` at session end.

    Time mode divides by the configured limit instead of the measured time so
    that a test ended by the limit is not skewed by poll granularity.
    """
    correct, incorrect = count_characters(words, buffers, cursor)
    if spec.mode is Mode.TIME:
        duration = float(spec.time_limit)
    else:
        duration = clock.elapsed(now)
    return calculate_wpm(correct, duration), calculate_accuracy(correct, incorrect)
