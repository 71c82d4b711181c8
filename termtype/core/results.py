from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def data_dir() -> Path:
    """Directory holding settings, results and the log file."""
    return Path.home() / ".termtype"


@dataclass(frozen=True)
class TestResult:
    """Final outcome of one test."""

    wpm: float
    accuracy: float
    timestamp: str

    __test__ = False

    @classmethod
    def now(cls, wpm: float, accuracy: float, when: Optional[datetime] = None) -> "TestResult":
        when = when or datetime.now()
        return cls(wpm=wpm, accuracy=accuracy, timestamp=when.strftime(TIMESTAMP_FORMAT))


class ResultStore:
    """Stores finished test results, grouped by test key. Persists to disk.
    File: ~/.termtype/results.json. Each key maps to results in completion order."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or data_dir() / "results.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._results = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def keys(self) -> List[str]:
        return sorted(self._results)

    def get(self, key: str) -> List[TestResult]:
        return list(self._results.get(key, []))

    def best(self, key: str) -> Optional[TestResult]:
        """Highest-WPM result stored under ``key``, if any."""
        results = self._results.get(key)
        if not results:
            return None
        return max(results, key=lambda r: r.wpm)

    def append(self, key: str, result: TestResult) -> None:
        self._results.setdefault(key, []).append(result)
        self._save()

    def _load(self) -> Dict[str, List[TestResult]]:
        results: Dict[str, List[TestResult]] = {}
        if not self._file_path.exists():
            return results
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load results from %s: %s", self._file_path, e)
            return results
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed results file %s", self._file_path)
            return results

        for key, entries in payload.items():
            if not isinstance(entries, list):
                continue
            parsed: List[TestResult] = []
            for entry in entries:
                if not isinstance(entry, dict):
                    continue
                try:
                    parsed.append(
                        TestResult(
                            wpm=float(entry.get("wpm", 0.0)),
                            accuracy=float(entry.get("accuracy", 0.0)),
                            timestamp=str(entry.get("timestamp", "")),
                        )
                    )
                except (TypeError, ValueError) as e:
                    logger.warning("Skipping bad result under %r in %s: %s", key, self._file_path, e)
            results[key] = parsed
        return results

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: [asdict(r) for r in results] for key, results in self._results.items()}
        try:
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save results to %s: %s", self._file_path, e)
