"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import (
    Board,
    BoardConfig,
    Cell,
    GameSession,
    JsonScoreStore,
    MemoryScoreStore,
)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines and 3 diamonds."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine and 1 diamond."""
    return Board(BoardConfig(3, 3, 1, 1), rng=random.Random(7))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines or diamonds for cascade testing."""
    return Board(BoardConfig(5, 5, 0, 0))


@pytest.fixture
def corner_board() -> Board:
    """
    Fixed layout with a mine in the top-left corner.

        * . . .
        . . . .
        . . . D
    """
    return Board.from_layout(["*...", "....", "...D"])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def item_cell() -> Cell:
    """Create a cell containing a diamond."""
    return Cell(row=1, col=2, is_item=True, adjacent_mines=1)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def memory_store() -> MemoryScoreStore:
    """Create an empty in-memory score store."""
    return MemoryScoreStore()


@pytest.fixture
def json_store(tmp_path: Path) -> JsonScoreStore:
    """Create a JSON score store in a temporary directory."""
    return JsonScoreStore(tmp_path / "scores.json")


@pytest.fixture
def session(memory_store: MemoryScoreStore) -> GameSession:
    """Create a seeded beginner session backed by memory."""
    return GameSession(store=memory_store, rng=random.Random(99))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10, 3)
