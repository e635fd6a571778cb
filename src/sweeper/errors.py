"""
Exceptions raised by the Diamond Sweeper engine.

Game-over and already-revealed actions are not errors: the engine
treats them as silent no-ops and reports them by returning False.
"""


class SweeperError(Exception):
    """Base class for engine errors."""


class InvalidConfiguration(SweeperError, ValueError):
    """Board dimensions, counts or layout cannot form a playable board."""


class OutOfBounds(SweeperError, IndexError):
    """Coordinates fall outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {rows}x{cols} board"
        )
        self.row = row
        self.col = col
