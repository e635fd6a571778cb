"""
Score persistence for Diamond Sweeper.

Sessions never touch storage directly. They receive a ScoreStore that
loads and saves the best score and a short leaderboard.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


LEADERBOARD_SIZE = 5


def _is_score(value) -> bool:
    """Check that a stored value is a plain integer score."""
    return isinstance(value, int) and not isinstance(value, bool)


def insert_score(
    leaderboard: List[int], score: int, limit: int = LEADERBOARD_SIZE
) -> List[int]:
    """
    Insert a score into a leaderboard.

    Args:
        leaderboard: Existing scores, best first.
        score: Score to add.
        limit: Maximum number of entries kept.

    Returns:
        New list sorted in descending order, capped at limit entries.
    """
    scores = list(leaderboard)
    scores.append(score)
    scores.sort(reverse=True)
    return scores[:limit]


# ============================================================================
# Store Interface
# ============================================================================

class ScoreStore(ABC):
    """Where a session loads and saves its persisted scores."""

    @abstractmethod
    def load_high_score(self) -> int:
        """Return the best score recorded so far, 0 if none."""

    @abstractmethod
    def save_high_score(self, score: int) -> None:
        """Persist a new best score."""

    @abstractmethod
    def load_leaderboard(self) -> List[int]:
        """Return stored leaderboard scores, best first."""

    @abstractmethod
    def save_leaderboard(self, scores: List[int]) -> None:
        """Persist the leaderboard."""


# ============================================================================
# Implementations
# ============================================================================

class MemoryScoreStore(ScoreStore):
    """Keeps scores for the lifetime of the process."""

    def __init__(
        self, high_score: int = 0, leaderboard: Optional[List[int]] = None
    ) -> None:
        self._high_score = high_score
        self._leaderboard = list(leaderboard or [])

    def load_high_score(self) -> int:
        return self._high_score

    def save_high_score(self, score: int) -> None:
        self._high_score = score

    def load_leaderboard(self) -> List[int]:
        return list(self._leaderboard)

    def save_leaderboard(self, scores: List[int]) -> None:
        self._leaderboard = list(scores)


class JsonScoreStore(ScoreStore):
    """
    Stores scores in a JSON file.

    File format:
        {"high_score": 120, "leaderboard": [120, 80, 40]}

    A missing or unreadable file behaves as an empty store. Write
    errors propagate to the caller.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            logger.warning("Ignoring unreadable score file %s: %s", self.path, error)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed score file %s", self.path)
            return {}
        return data

    def _write(self, **values) -> None:
        data = self._read()
        data.update(values)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def load_high_score(self) -> int:
        score = self._read().get("high_score", 0)
        if not _is_score(score):
            logger.warning("Ignoring invalid high score %r in %s", score, self.path)
            return 0
        return score

    def save_high_score(self, score: int) -> None:
        self._write(high_score=score)

    def load_leaderboard(self) -> List[int]:
        scores = self._read().get("leaderboard", [])
        if not isinstance(scores, list) or not all(map(_is_score, scores)):
            logger.warning("Ignoring invalid leaderboard %r in %s", scores, self.path)
            return []
        return sorted(scores, reverse=True)

    def save_leaderboard(self, scores: List[int]) -> None:
        self._write(leaderboard=list(scores))
