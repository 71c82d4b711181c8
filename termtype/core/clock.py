from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Live WPM is refreshed at most once per this many seconds.
SAMPLE_INTERVAL = 1.0


@dataclass
class SessionClock:
    """Monotonic instants of the first keystroke and of the last live sample."""

    started_at: Optional[float] = None
    last_sample_at: Optional[float] = None

    @property
    def started(self) -> bool:
        return self.started_at is not None

    def start(self, now: float) -> None:
        if self.started_at is None:
            self.started_at = now

    def elapsed(self, now: float) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, now - self.started_at)

    def sample_due(self, now: float) -> bool:
        return self.last_sample_at is None or now - self.last_sample_at >= SAMPLE_INTERVAL

    def mark_sampled(self, now: float) -> None:
        self.last_sample_at = now

    def reset(self) -> None:
        self.started_at = None
        self.last_sample_at = None
