"""
Diamond Sweeper game module.

Provides the board engine, cell state, game sessions with score
persistence, and a Gymnasium environment host.
"""
from .errors import SweeperError, InvalidConfiguration, OutOfBounds
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    GameStatus,
    neighbors,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    CLASSIC,
)
from .scores import ScoreStore, MemoryScoreStore, JsonScoreStore, insert_score
from .session import GameSession, SessionSnapshot, ITEM_SCORE
from .environment import SweeperEnv, make_vec_env

__all__ = [
    "SweeperError",
    "InvalidConfiguration",
    "OutOfBounds",
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "GameStatus",
    "neighbors",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "CLASSIC",
    "ScoreStore",
    "MemoryScoreStore",
    "JsonScoreStore",
    "insert_score",
    "GameSession",
    "SessionSnapshot",
    "ITEM_SCORE",
    "SweeperEnv",
    "make_vec_env",
]
