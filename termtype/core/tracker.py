from __future__ import annotations

from typing import List, Optional


class InputTracker:
    """Per-word typed buffers plus the index of the word being typed.

    One buffer exists per queue slot. Buffers left behind by ``advance`` are
    kept so finished words can still be scored and drawn.
    """

    def __init__(self, size: int) -> None:
        self._buffers: List[str] = [""] * size
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def buffers(self) -> List[str]:
        return list(self._buffers)

    @property
    def current(self) -> str:
        return self._buffers[self._cursor]

    @property
    def is_last(self) -> bool:
        return self._cursor == len(self._buffers) - 1

    def __len__(self) -> int:
        return len(self._buffers)

    def push_char(self, char: str) -> None:
        self._buffers[self._cursor] += char

    def backspace(self) -> None:
        # Never steps back into the previous word.
        self._buffers[self._cursor] = self._buffers[self._cursor][:-1]

    def advance(self) -> bool:
        """Move to the next word; returns False when already on the last one."""
        if self.is_last:
            return False
        self._cursor += 1
        return True

    def extend(self, count: int) -> None:
        self._buffers.extend([""] * count)

    def reset(self, size: Optional[int] = None) -> None:
        self._buffers = [""] * (len(self._buffers) if size is None else size)
        self._cursor = 0
