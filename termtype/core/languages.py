from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from termtype.core.spec import Difficulty


@dataclass(frozen=True)
class LanguagePack:
    name: str
    words: Dict[Difficulty, Tuple[str, ...]]

    def words_for(self, difficulty: Difficulty) -> Tuple[str, ...]:
        return self.words.get(difficulty, ())


def default_languages_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "languages"


def parse_pack(raw: object, source_name: str) -> LanguagePack:
    """Build a pack from loaded YAML, raising ValueError with the file name on bad input."""
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{source_name}: expected YAML with 'name' and 'words'")
    name = raw.get("name")
    content = raw.get("words")
    if not name or not isinstance(name, str):
        raise ValueError(f"{source_name}: missing or invalid 'name'")
    if not isinstance(content, dict) or not content:
        raise ValueError(f"{source_name}: 'words' must map difficulties to word lists")

    words: Dict[Difficulty, Tuple[str, ...]] = {}
    for level, entries in content.items():
        try:
            difficulty = Difficulty(str(level).capitalize())
        except ValueError:
            raise ValueError(f"{source_name}: unknown difficulty {level!r}") from None
        if isinstance(entries, list):
            items = [str(item).strip() for item in entries if str(item).strip()]
        else:
            # allow a whitespace separated block
            items = str(entries or "").split()
        words[difficulty] = tuple(items)
    return LanguagePack(name=name.strip(), words=words)


class LanguageRepository:
    """Word lists bundled as ``<name>.yaml`` files, in file-name order."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or default_languages_dir()
        self._packs = self._load_packs()

    def names(self) -> List[str]:
        return list(self._packs)

    def resolve(self, name: str) -> Tuple[LanguagePack, bool]:
        """Return the pack called ``name``, or the first pack and ``True`` if it is missing."""
        if name in self._packs:
            return self._packs[name], False
        return next(iter(self._packs.values())), True

    def _load_packs(self) -> Dict[str, LanguagePack]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Languages directory not found: {self._base_dir}")

        packs: Dict[str, LanguagePack] = {}
        for path in sorted(self._base_dir.glob("*.yaml")):
            pack = parse_pack(yaml.safe_load(path.read_text(encoding="utf-8")), path.name)
            packs[pack.name] = pack

        if not packs:
            raise ValueError(f"No language files (*.yaml) found in {self._base_dir}")
        return packs
