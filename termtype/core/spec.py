"""Immutable description of one typing test, resolved from settings at session start."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from termtype.core.languages import LanguageRepository
    from termtype.core.settings import Settings

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Time mode keeps at least REPLENISH_MARGIN words ahead of the cursor and
# tops the queue up REPLENISH_BATCH words at a time.
REPLENISH_BATCH = 20
REPLENISH_MARGIN = 10

MUTED: RGB = (128, 128, 128)


class ConfigurationError(ValueError):
    """Raised when settings cannot produce a runnable test."""


class Mode(Enum):
    WORDS = "Words"
    TIME = "Time"


class LayoutStyle(Enum):
    FLOWING = "Default"
    FRAMED = "Boxes"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class ColorTheme:
    correct: RGB = (0, 255, 0)
    incorrect: RGB = (255, 0, 0)
    default: RGB = (255, 255, 255)
    muted: RGB = MUTED


@dataclass(frozen=True)
class TestSpec:
    """Everything a session needs, frozen for its whole lifetime.

    ``language`` is the pack actually used; ``language_fallback`` is True when
    the configured language was missing and the first available pack was
    substituted.
    """

    mode: Mode
    words: Tuple[str, ...]
    word_count: int = 20
    time_limit: int = 60
    theme: ColorTheme = field(default_factory=ColorTheme)
    layout: LayoutStyle = LayoutStyle.FLOWING
    restart_enabled: bool = True
    language: str = "english"
    difficulty: Difficulty = Difficulty.EASY
    language_fallback: bool = False
    replenish_batch: int = REPLENISH_BATCH
    replenish_margin: int = REPLENISH_MARGIN

    # Keeps pytest from collecting this class.
    __test__ = False

    def __post_init__(self) -> None:
        if not self.words:
            raise ConfigurationError(
                f"No words available for {self.language}/{self.difficulty.value}"
            )
        if self.mode is Mode.WORDS and self.word_count <= 0:
            raise ConfigurationError(f"Word count must be positive, got {self.word_count}")
        if self.mode is Mode.TIME and self.time_limit <= 0:
            raise ConfigurationError(f"Time limit must be positive, got {self.time_limit}")
        if self.replenish_batch <= 0 or self.replenish_margin <= 0:
            raise ConfigurationError("Replenishment batch and margin must be positive")

    @property
    def result_key(self) -> str:
        """Key under which results of this test are stored, e.g. ``words_20_Easy``."""
        if self.mode is Mode.TIME:
            return f"time_{self.time_limit}_{self.difficulty.value}"
        return f"words_{self.word_count}_{self.difficulty.value}"

    @classmethod
    def from_settings(cls, settings: "Settings", languages: "LanguageRepository") -> "TestSpec":
        pack, fell_back = languages.resolve(settings.language)
        if fell_back:
            logger.warning(
                "Language %r not available, using %r instead", settings.language, pack.name
            )
        return cls(
            mode=settings.game_mode,
            words=tuple(pack.words_for(settings.difficulty)),
            word_count=settings.default_test_length,
            time_limit=settings.default_time_limit,
            theme=settings.color_theme,
            layout=settings.layout_theme,
            restart_enabled=settings.restart_button,
            language=pack.name,
            difficulty=settings.difficulty,
            language_fallback=fell_back,
        )
