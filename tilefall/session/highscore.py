"""
High Score - The only persisted artifact of the game.

A single integer: the highest turn count reached on a win.
It is read at game start and written only when a win beats the record.

Design decisions:
- Simple file-based storage (JSON)
- Missing or corrupt file reads as 0
- In-memory store for tests and embedded hosts
"""

from __future__ import annotations
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path


logger = logging.getLogger(__name__)


class HighScoreStore(ABC):
    """Process-wide best score storage."""

    @abstractmethod
    def get(self) -> int:
        """Return the stored best, 0 if none."""
        pass

    @abstractmethod
    def set(self, value: int):
        pass

    def record_win(self, turns: int) -> bool:
        """
        Store `turns` if it is strictly greater than the current best.

        Returns True when a new record was written.
        """
        if turns > self.get():
            self.set(turns)
            return True
        return False


class InMemoryHighScoreStore(HighScoreStore):

    def __init__(self, initial: int = 0):
        self._value = initial

    def get(self) -> int:
        return self._value

    def set(self, value: int):
        self._value = value


class FileHighScoreStore(HighScoreStore):
    """
    JSON file store.

    Usage:
        store = FileHighScoreStore("~/.tilefall/highscore.json")
        best = store.get()
    """

    def __init__(self, path: str | Path | None = None):
        if path is None:
            path = Path.home() / ".tilefall" / "highscore.json"
        self.path = Path(path).expanduser()

    def get(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return int(data.get("highscore", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0

    def set(self, value: int):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"highscore": value}, f, indent=2)
