from __future__ import annotations

import random
from typing import Iterator, List, Optional, Sequence

from termtype.core.spec import REPLENISH_BATCH, REPLENISH_MARGIN, Mode, TestSpec

# Independent permutations of the source used to pre-fill a Time mode queue.
TIME_POOL_PASSES = 10


class WordQueue:
    """Ordered words to type. Grows by appending, never shrinks mid-session."""

    def __init__(
        self,
        words: Sequence[str],
        source: Sequence[str],
        rng: Optional[random.Random] = None,
        batch_size: int = REPLENISH_BATCH,
        margin: int = REPLENISH_MARGIN,
    ) -> None:
        self._words: List[str] = list(words)
        self._source = list(source)
        self._rng = rng or random.Random()
        self._batch_size = batch_size
        self._margin = margin

    @classmethod
    def draw(cls, spec: TestSpec, rng: Optional[random.Random] = None) -> "WordQueue":
        """Draw a fresh queue for ``spec``."""
        rng = rng or random.Random()
        source = list(spec.words)
        if spec.mode is Mode.TIME:
            words: List[str] = []
            for _ in range(TIME_POOL_PASSES):
                words.extend(rng.sample(source, len(source)))
        else:
            words = []
            while len(words) < spec.word_count:
                take = min(spec.word_count - len(words), len(source))
                words.extend(rng.sample(source, take))
        return cls(words, source, rng, spec.replenish_batch, spec.replenish_margin)

    @property
    def words(self) -> List[str]:
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index: int) -> str:
        return self._words[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def remaining(self, cursor: int) -> int:
        """Number of words from ``cursor`` (inclusive) to the end."""
        return len(self._words) - cursor

    def needs_replenish(self, cursor: int) -> bool:
        return self.remaining(cursor) < self._margin

    def replenish(self) -> int:
        """Append a random batch from the source and return how many words were added."""
        batch = self._rng.sample(self._source, min(self._batch_size, len(self._source)))
        self._words.extend(batch)
        return len(batch)
