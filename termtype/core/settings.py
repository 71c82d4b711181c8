from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

from termtype.core.results import data_dir
from termtype.core.spec import ColorTheme, Difficulty, LayoutStyle, Mode

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Settings:
    """User defaults, read when a session starts and never changed during one."""

    default_test_length: int = 20
    default_time_limit: int = 60
    game_mode: Mode = Mode.WORDS
    restart_button: bool = True
    color_theme: ColorTheme = field(default_factory=ColorTheme)
    layout_theme: LayoutStyle = LayoutStyle.FLOWING
    language: str = "english"
    difficulty: Difficulty = Difficulty.EASY


def _enum(enum_type: Type[E], value: Any, default: E) -> E:
    try:
        return enum_type(value)
    except ValueError:
        logger.warning("Unknown %s %r, using %s", enum_type.__name__, value, default.value)
        return default


def _rgb(value: Any, default: tuple) -> tuple:
    if isinstance(value, (list, tuple)) and len(value) == 3:
        try:
            return tuple(max(0, min(255, int(c))) for c in value)
        except (TypeError, ValueError):
            pass
    return default


def settings_from_dict(payload: Dict[str, Any]) -> Settings:
    defaults = Settings()
    theme = payload.get("color_theme") or {}
    if not isinstance(theme, dict):
        theme = {}
    base = defaults.color_theme
    return Settings(
        default_test_length=int(payload.get("default_test_length", defaults.default_test_length)),
        default_time_limit=int(payload.get("default_time_limit", defaults.default_time_limit)),
        game_mode=_enum(Mode, payload.get("game_mode", defaults.game_mode.value), defaults.game_mode),
        restart_button=bool(payload.get("restart_button", defaults.restart_button)),
        color_theme=ColorTheme(
            correct=_rgb(theme.get("correct"), base.correct),
            incorrect=_rgb(theme.get("incorrect"), base.incorrect),
            default=_rgb(theme.get("default"), base.default),
        ),
        layout_theme=_enum(
            LayoutStyle, payload.get("layout_theme", defaults.layout_theme.value), defaults.layout_theme
        ),
        language=str(payload.get("selected_language", defaults.language)),
        difficulty=_enum(
            Difficulty, payload.get("word_list_difficulty", defaults.difficulty.value), defaults.difficulty
        ),
    )


def settings_to_dict(settings: Settings) -> Dict[str, Any]:
    theme = settings.color_theme
    return {
        "default_test_length": settings.default_test_length,
        "default_time_limit": settings.default_time_limit,
        "game_mode": settings.game_mode.value,
        "restart_button": settings.restart_button,
        "color_theme": {
            "correct": list(theme.correct),
            "incorrect": list(theme.incorrect),
            "default": list(theme.default),
        },
        "layout_theme": settings.layout_theme.value,
        "selected_language": settings.language,
        "word_list_difficulty": settings.difficulty.value,
    }


class SettingsStore:
    """Loads and saves Settings as JSON. File: ~/.termtype/config.json.
    A missing or unreadable file yields defaults, which are written back."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or data_dir() / "config.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> Settings:
        if not self._file_path.exists():
            settings = Settings()
            self.save(settings)
            return settings
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                raise ValueError("expected a JSON object")
            return settings_from_dict(payload)
        except (ValueError, TypeError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._file_path, e)
            settings = Settings()
            self.save(settings)
            return settings

    def save(self, settings: Settings) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_path.write_text(json.dumps(settings_to_dict(settings), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self._file_path, e)
