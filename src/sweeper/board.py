"""
Board module for Diamond Sweeper.

Implements the game board with deferred mine and diamond placement,
cell revealing with flood fill, flagging, and game status management.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellView
from .errors import InvalidConfiguration, OutOfBounds

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of a game."""

    PENDING = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()


MINE_CHAR = "*"
ITEM_CHAR = "D"
EMPTY_CHAR = "."


@dataclass
class BoardConfig:
    """
    Configuration for a Diamond Sweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
        num_items: Total diamonds to place.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10
    num_items: int = 3

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        if self.num_items < 0:
            raise InvalidConfiguration("Number of diamonds cannot be negative")
        max_special = self.total_cells - 1
        if self.num_mines + self.num_items > max_special:
            raise InvalidConfiguration(
                f"Too many mines and diamonds (max {max_special} combined)"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10, 3)
INTERMEDIATE = BoardConfig(16, 16, 40, 8)
EXPERT = BoardConfig(16, 30, 99, 15)
CLASSIC = BoardConfig(10, 10, 10, 5)


# ============================================================================
# Neighbor Utilities
# ============================================================================

def neighbors(row: int, col: int, rows: int, cols: int) -> List[Tuple[int, int]]:
    """
    Get valid neighboring positions of a cell.

    Neighbors are the up to 8 cells at Chebyshev distance 1, clipped
    at the board edges.

    Args:
        row: Row index of center cell.
        col: Column index of center cell.
        rows: Number of rows on the board.
        cols: Number of columns on the board.

    Returns:
        List of (row, col) tuples for valid neighbors.
    """
    result = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < rows and 0 <= new_col < cols:
                result.append((new_row, new_col))
    return result


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Diamond Sweeper game board.

    Manages the grid of cells, mine and diamond placement, revealing
    logic, and win/lose conditions. Content is placed on the first
    open so that the first opened cell is always safe.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: Optional[random.Random] = field(default=None, repr=False, compare=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _status: GameStatus = GameStatus.PENDING
    _first_move_pending: bool = True
    _items_collected: int = 0
    _safe_revealed: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if self.rng is None:
            self.rng = random.Random()
        self._init_grid()

    @classmethod
    def from_layout(
        cls, layout: Sequence[str], rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Build an active board from a text layout.

        Each string is one row: '*' is a mine, 'D' a diamond and '.'
        an empty cell. Placement is already done, so the first open
        is not protected.

        Raises:
            InvalidConfiguration: If the layout is empty, ragged, holds
                unknown characters, or has no free cell.
        """
        if not layout or not layout[0]:
            raise InvalidConfiguration("Layout must not be empty")
        width = len(layout[0])
        if any(len(line) != width for line in layout):
            raise InvalidConfiguration("Layout rows must have equal length")
        unknown = set("".join(layout)) - {MINE_CHAR, ITEM_CHAR, EMPTY_CHAR}
        if unknown:
            raise InvalidConfiguration(
                f"Unknown layout characters: {''.join(sorted(unknown))}"
            )

        text = "".join(layout)
        config = BoardConfig(
            len(layout), width, text.count(MINE_CHAR), text.count(ITEM_CHAR)
        )
        board = cls(config, rng=rng)
        for row, line in enumerate(layout):
            for col, char in enumerate(line):
                board._grid[row][col].is_mine = char == MINE_CHAR
                board._grid[row][col].is_item = char == ITEM_CHAR
        board._calculate_adjacent_mines()
        board._first_move_pending = False
        board._status = GameStatus.ACTIVE
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row=row, col=col) for col in range(self.config.cols)]
            for row in range(self.config.rows)
        ]

    def _place_content(self, exclude: Tuple[int, int]) -> None:
        """
        Place mines and diamonds randomly, excluding a specific cell.

        A single draw without replacement is split into mines and
        diamonds, so both sets are uniform and disjoint.

        Args:
            exclude: (row, col) position to keep empty.
        """
        positions = self._get_candidate_positions(exclude)
        chosen = self.rng.sample(
            positions, self.config.num_mines + self.config.num_items
        )
        for row, col in chosen[:self.config.num_mines]:
            self._grid[row][col].is_mine = True
        for row, col in chosen[self.config.num_mines:]:
            self._grid[row][col].is_item = True
        logger.debug(
            "Placed %d mines and %d diamonds avoiding %s",
            self.config.num_mines, self.config.num_items, exclude,
        )

    def _get_candidate_positions(
        self, exclude: Tuple[int, int]
    ) -> List[Tuple[int, int]]:
        """Get all positions that may receive content."""
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if (row, col) != exclude
        ]

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self.cells():
            if cell.is_mine:
                cell.adjacent_mines = 0
            else:
                cell.adjacent_mines = self._count_adjacent_mines(
                    cell.row, cell.col
                )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    def _neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Get neighbors of a cell on this board."""
        return neighbors(row, col, self.config.rows, self.config.cols)

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_position(self, row: int, col: int) -> None:
        """Raise OutOfBounds unless position is on the board."""
        if not self._is_valid_position(row, col):
            raise OutOfBounds(row, col, self.config.rows, self.config.cols)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, row: int, col: int) -> bool:
        """
        Open the cell at the given position.

        On the first open, places mines and diamonds avoiding this cell.
        Opening a cell with no adjacent mines floods outward over the
        connected empty region. Opening a mine loses the game; opening
        a diamond collects it.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            True if any cell was revealed, False for a no-op (game over,
            cell already revealed or flagged).

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self._check_position(row, col)
        if not self.is_playing:
            return False
        if not self._grid[row][col].is_hidden:
            return False

        if self._first_move_pending:
            self._handle_first_move(row, col)

        self._reveal_from([(row, col)])
        return True

    def _handle_first_move(self, row: int, col: int) -> None:
        """Handle first open: place content and calculate counts."""
        self._first_move_pending = False
        self._place_content((row, col))
        self._calculate_adjacent_mines()
        self._status = GameStatus.ACTIVE

    def _reveal_from(self, stack: List[Tuple[int, int]]) -> None:
        """
        Reveal cells from a work stack, flooding over empty cells.

        Stops at the first mine. Flagged and revealed cells are
        skipped, so the fill terminates.
        """
        revealed = 0
        while stack:
            row, col = stack.pop()
            cell = self._grid[row][col]
            if not cell.reveal():
                continue
            revealed += 1

            if cell.is_mine:
                self._status = GameStatus.LOST
                logger.info("Mine opened at (%d, %d)", row, col)
                return

            self._safe_revealed += 1
            if cell.is_item:
                self._items_collected += 1
            # Diamonds are safe, so a zero-count diamond floods too
            if cell.adjacent_mines == 0:
                stack.extend(
                    position for position in self._neighbors(row, col)
                    if self._grid[position[0]][position[1]].is_hidden
                )

        if revealed > 1:
            logger.debug("Flood fill revealed %d cells", revealed)
        self._check_win_condition()

    def _check_win_condition(self) -> None:
        """
        Win once every diamond is collected.

        Hidden safe cells do not matter, so a board without diamonds
        is won by its first safe open.
        """
        if self._items_collected >= self.config.num_items:
            self._status = GameStatus.WON
            logger.info("Board cleared after %d reveals", self._safe_revealed)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self._check_position(row, col)
        if not self.is_playing:
            return False
        return self._grid[row][col].toggle_flag()

    def chord(self, row: int, col: int) -> bool:
        """
        Chord action: open all unflagged neighbors if flag count matches.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if chord was performed, False otherwise.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self._check_position(row, col)
        if not self._can_chord(row, col):
            return False

        hidden = [
            (neighbor_row, neighbor_col)
            for neighbor_row, neighbor_col in self._neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_hidden
        ]
        if not hidden:
            return False
        self._reveal_from(hidden)
        return True

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        if self._status != GameStatus.ACTIVE:
            return False
        cell = self._grid[row][col]
        if not cell.is_revealed or not cell.is_plain:
            return False
        if cell.adjacent_mines == 0:
            return False
        return self._count_adjacent_flags(row, col) == cell.adjacent_mines

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self._neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game still accepts moves."""
        return self._status in (GameStatus.PENDING, GameStatus.ACTIVE)

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def first_move_pending(self) -> bool:
        """Check if content placement still waits for the first open."""
        return self._first_move_pending

    @property
    def items_collected(self) -> int:
        """Number of diamonds revealed so far."""
        return self._items_collected

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags placed; negative when over-flagged."""
        flags = sum(1 for cell in self.cells() if cell.is_flagged)
        return self.config.num_mines - flags

    def cells(self) -> Iterator[Cell]:
        """Iterate over cells in row-major order."""
        for row in self._grid:
            yield from row

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self._check_position(row, col)
        return self._grid[row][col]

    def view(self) -> Tuple[Tuple[CellView, ...], ...]:
        """Snapshot every cell as immutable views, row by row."""
        return tuple(
            tuple(cell.view() for cell in row) for row in self._grid
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10 = revealed diamond
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be opened.

        Returns:
            List of (row, col) positions of hidden cells.
        """
        return [(cell.row, cell.col) for cell in self.cells() if cell.is_hidden]

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()
        self._status = GameStatus.PENDING
        self._first_move_pending = True
        self._items_collected = 0
        self._safe_revealed = 0
