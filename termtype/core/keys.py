"""Abstract keyboard events consumed by the typing session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(Enum):
    CHAR = "char"
    SPACE = "space"
    BACKSPACE = "backspace"
    RESTART = "restart"
    ABORT = "abort"


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: Optional[str] = None

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char)


SPACE = KeyEvent(KeyKind.SPACE)
BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
RESTART = KeyEvent(KeyKind.RESTART)
ABORT = KeyEvent(KeyKind.ABORT)
