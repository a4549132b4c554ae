# storage.py
from __future__ import annotations

from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)


class HighScoreStore:
    """
    High score kept in a small JSON file: {"high_score": <int>}.

    Storage problems never reach the caller. They are logged and the score
    falls back to 0 on load, or stays in memory only on save.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> int:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = data["high_score"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"invalid high score {value!r}")
            return value
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0

    def save(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(value)}, f)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)


class MemoryHighScoreStore:
    """Session-only store for headless runs and tests."""

    def __init__(self, initial: int = 0) -> None:
        self.value = initial
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
        self.saves += 1
