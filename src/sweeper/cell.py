"""
Cell module for Diamond Sweeper.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/diamond/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_OBSERVATION = -1
FLAGGED_OBSERVATION = -2
MINE_OBSERVATION = 9
ITEM_OBSERVATION = 10


# ============================================================================
# Read-only View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """Immutable copy of a cell handed to renderers."""

    row: int
    col: int
    revealed: bool
    flagged: bool
    is_mine: bool
    is_item: bool
    adjacent_mines: int


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Diamond Sweeper grid.

    Attributes:
        row: Row index of the cell.
        col: Column index of the cell.
        is_mine: Whether this cell contains a mine.
        is_item: Whether this cell contains a diamond. Never set
            together with is_mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    is_item: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_plain(self) -> bool:
        """Check if cell holds neither a mine nor a diamond."""
        return not (self.is_mine or self.is_item)

    def to_observation(self) -> int:
        """
        Convert cell to an integer code for renderers and agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
            10: Revealed diamond
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_OBSERVATION
        if self.state == CellState.FLAGGED:
            return FLAGGED_OBSERVATION
        if self.is_mine:
            return MINE_OBSERVATION
        if self.is_item:
            return ITEM_OBSERVATION
        return self.adjacent_mines

    def view(self) -> CellView:
        """Snapshot this cell as an immutable CellView."""
        return CellView(
            row=self.row,
            col=self.col,
            revealed=self.is_revealed,
            flagged=self.is_flagged,
            is_mine=self.is_mine,
            is_item=self.is_item,
            adjacent_mines=self.adjacent_mines,
        )
