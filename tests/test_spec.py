"""Tests for termtype.core.spec – building and validating a TestSpec."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
import yaml

from conftest import make_spec
from termtype.core.languages import LanguageRepository
from termtype.core.settings import Settings
from termtype.core.spec import ConfigurationError, Difficulty, LayoutStyle, Mode, TestSpec


@pytest.fixture()
def languages(tmp_path: Path) -> LanguageRepository:
    d = tmp_path / "languages"
    d.mkdir()
    for name, words in (("alpha", ["a", "b"]), ("beta", ["c", "d"])):
        data = {"name": name, "words": {"easy": words, "hard": [w * 3 for w in words]}}
        (d / f"{name}.yaml").write_text(yaml.safe_dump(data), encoding="utf-8")
    return LanguageRepository(d)


class TestResultKey:
    def test_words_mode(self):
        assert make_spec(word_count=25).result_key == "words_25_Easy"

    def test_time_mode(self):
        spec = make_spec(mode=Mode.TIME, time_limit=30, difficulty=Difficulty.HARD)
        assert spec.result_key == "time_30_Hard"


class TestValidation:
    def test_empty_source(self):
        with pytest.raises(ConfigurationError, match="No words"):
            make_spec(words=())

    def test_zero_word_count(self):
        with pytest.raises(ConfigurationError, match="Word count"):
            make_spec(word_count=0)

    def test_zero_time_limit(self):
        with pytest.raises(ConfigurationError, match="Time limit"):
            make_spec(mode=Mode.TIME, time_limit=0)

    def test_time_limit_ignored_in_words_mode(self):
        assert make_spec(time_limit=0).mode is Mode.WORDS

    def test_bad_replenish_constants(self):
        with pytest.raises(ConfigurationError):
            make_spec(replenish_margin=0)

    def test_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_frozen(self):
        spec = make_spec()
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.word_count = 10  # type: ignore[misc]


class TestFromSettings:
    def test_copies_settings(self, languages: LanguageRepository):
        settings = Settings(
            default_test_length=7,
            default_time_limit=15,
            game_mode=Mode.TIME,
            restart_button=False,
            layout_theme=LayoutStyle.FRAMED,
            language="beta",
            difficulty=Difficulty.HARD,
        )
        spec = TestSpec.from_settings(settings, languages)
        assert spec.mode is Mode.TIME
        assert spec.word_count == 7
        assert spec.time_limit == 15
        assert spec.restart_enabled is False
        assert spec.layout is LayoutStyle.FRAMED
        assert spec.words == ("ccc", "ddd")
        assert spec.language == "beta"
        assert spec.language_fallback is False

    def test_language_fallback_is_recorded(self, languages: LanguageRepository):
        spec = TestSpec.from_settings(Settings(language="missing"), languages)
        assert spec.language == "alpha"
        assert spec.language_fallback is True
        assert spec.words == ("a", "b")

    def test_difficulty_without_words(self, languages: LanguageRepository):
        with pytest.raises(ConfigurationError):
            TestSpec.from_settings(Settings(language="alpha", difficulty=Difficulty.MEDIUM), languages)
