"""
Game session for Diamond Sweeper.

A session wraps one board, keeps the score, and records finished games
into the injected score store.
"""
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, BoardConfig, GameStatus
from .cell import CellView
from .scores import MemoryScoreStore, ScoreStore, insert_score

logger = logging.getLogger(__name__)


# Points awarded per collected diamond
ITEM_SCORE = 10


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only state of a session for renderers."""

    status: GameStatus
    score: int
    high_score: int
    items_collected: int
    items_total: int
    mines_remaining: int
    cells: Tuple[Tuple[CellView, ...], ...]
    leaderboard: Tuple[int, ...]


class GameSession:
    """
    One game of Diamond Sweeper plus the persisted scores around it.

    Hosts call open, toggle_flag and chord in response to input and
    render snapshot(). reset() starts a new game on a fresh board.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        store: Optional[ScoreStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize a session.

        Args:
            config: Board configuration (default: 9x9, 10 mines, 3 diamonds).
            store: Score persistence (default: in-memory).
            rng: Random source for content placement.
        """
        self.store = store if store is not None else MemoryScoreStore()
        self.high_score = self.store.load_high_score()
        self.leaderboard: List[int] = self.store.load_leaderboard()
        self._rng = rng
        self.board = Board(config or BoardConfig(), rng=rng)
        self.score = 0
        self._recorded = False

    @property
    def config(self) -> BoardConfig:
        """Configuration of the current board."""
        return self.board.config

    @property
    def status(self) -> GameStatus:
        """Status of the current game."""
        return self.board.status

    @property
    def items_collected(self) -> int:
        """Diamonds collected in the current game."""
        return self.board.items_collected

    # ========================================================================
    # Player Actions
    # ========================================================================

    def open(self, row: int, col: int) -> bool:
        """Open a cell. Returns False for no-ops."""
        changed = self.board.open(row, col)
        if changed:
            self._after_move()
        return changed

    def toggle_flag(self, row: int, col: int) -> bool:
        """Toggle a flag. Returns False for no-ops."""
        return self.board.toggle_flag(row, col)

    def chord(self, row: int, col: int) -> bool:
        """Open the unflagged neighbors of a satisfied number."""
        changed = self.board.chord(row, col)
        if changed:
            self._after_move()
        return changed

    def reset(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Start a new game, replacing the board.

        Args:
            config: New configuration, or None to keep the current one.
            rng: New random source, or None to keep the current one.
        """
        if rng is not None:
            self._rng = rng
        self.board = Board(config or self.board.config, rng=self._rng)
        self.score = 0
        self._recorded = False

    # ========================================================================
    # Scoring
    # ========================================================================

    def _after_move(self) -> None:
        """Update the score and record a game that just ended."""
        self.score = self.board.items_collected * ITEM_SCORE
        if not self.board.is_playing and not self._recorded:
            self._record_result()

    def _record_result(self) -> None:
        """Save the finished game's score once."""
        self._recorded = True
        logger.info(
            "Game %s with score %d", self.board.status.name.lower(), self.score
        )
        if self.score > self.high_score:
            logger.info("New high score %d (was %d)", self.score, self.high_score)
            self.high_score = self.score
            self.store.save_high_score(self.score)
        self.leaderboard = insert_score(self.leaderboard, self.score)
        self.store.save_leaderboard(self.leaderboard)

    def snapshot(self) -> SessionSnapshot:
        """Get an immutable copy of the session state."""
        return SessionSnapshot(
            status=self.board.status,
            score=self.score,
            high_score=self.high_score,
            items_collected=self.board.items_collected,
            items_total=self.board.config.num_items,
            mines_remaining=self.board.mines_remaining,
            cells=self.board.view(),
            leaderboard=tuple(self.leaderboard),
        )
