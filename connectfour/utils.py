"""
utils.py - Constants, enumerations and helpers for the Connect Four game

This module provides the cell/player/status enumerations, the exception
hierarchy, direction vectors used by win detection, and the board renderer
shared by the console interface and the Gymnasium environment.
"""

from enum import Enum, auto
from typing import Optional, List

import numpy as np

# Game constants
CONNECT_N = 4  # Number of pieces in a row to win
MIN_ROWS = 4
MIN_COLS = 4
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConnectFourError(Exception):
    """Base class for all errors raised by the game."""


class InvalidDimensionError(ConnectFourError, ValueError):
    """Raised when a board is requested smaller than the minimum size."""

    def __init__(self, rows, cols):
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"Both rows and columns must be at least {MIN_ROWS}. "
            f"You entered: {rows} rows and {cols} columns."
        )


class GameAlreadyOverError(ConnectFourError, RuntimeError):
    """Raised when a move is attempted after the game has finished."""


class HistoryError(ConnectFourError):
    """Raised when the game history file cannot be read or written."""


class Cell(Enum):
    """Enumeration representing the content of a board cell."""
    EMPTY = 0
    X = 1
    O = 2

    def __str__(self):
        if self == Cell.EMPTY:
            return " "
        return self.name


class Player(Enum):
    """Enumeration representing the two players."""
    X = 1  # Always moves first
    O = 2

    def other(self) -> 'Player':
        """Get the other player."""
        return Player.O if self == Player.X else Player.X

    @property
    def cell(self) -> Cell:
        """The mark this player writes into a cell."""
        return Cell(self.value)

    def __str__(self):
        return self.name


class GameStatus(Enum):
    """Enumeration representing the game status."""
    IN_PROGRESS = auto()
    X_WON = auto()
    O_WON = auto()
    DRAW = auto()

    @classmethod
    def won_by(cls, player: Player) -> 'GameStatus':
        return cls.X_WON if player == Player.X else cls.O_WON

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameStatus.X_WON:
            return Player.X
        if self == GameStatus.O_WON:
            return Player.O
        return None

    def outcome_text(self) -> str:
        """
        Human-readable outcome as stored in the game history.

        Raises:
            ValueError: if the game is still in progress
        """
        if self == GameStatus.DRAW:
            return "Draw"
        if self.winner is not None:
            return f"Player {self.winner} won"
        raise ValueError("Game is still in progress")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# Direction vectors (row, col) for each direction; row grows downward
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1)
}


def anchor_ranges(direction: Direction, rows: int, cols: int):
    """
    Get the anchor row and column ranges for a direction.

    A run of CONNECT_N cells starting at any anchor in these ranges stays
    inside a rows x cols board.

    Args:
        direction: Direction of the run
        rows: Number of board rows
        cols: Number of board columns

    Returns:
        Tuple of (row range, column range)
    """
    span = CONNECT_N - 1
    if direction == Direction.HORIZONTAL:
        return range(rows), range(cols - span)
    if direction == Direction.VERTICAL:
        return range(rows - span), range(cols)
    if direction == Direction.DIAGONAL_DOWN_RIGHT:
        return range(rows - span), range(cols - span)
    return range(rows - span), range(span, cols)


def is_valid_position(row: int, col: int, rows: int, cols: int) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < rows and 0 <= col < cols


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as box-drawn text with 1-based column labels.

    Args:
        grid: The board grid of Cell values

    Returns:
        Multi-line text representation of the board
    """
    rows, cols = grid.shape
    segment = "───"

    lines: List[str] = []
    lines.append("  " + "".join(f" {i:<3}" for i in range(1, cols + 1)).rstrip())
    lines.append(" ┌" + "┬".join([segment] * cols) + "┐")

    for row in range(rows):
        cells = "".join(f" {Cell(int(grid[row, col]))} │" for col in range(cols))
        lines.append(" │" + cells)
        if row < rows - 1:
            lines.append(" ├" + "┼".join([segment] * cols) + "┤")

    lines.append(" └" + "┴".join([segment] * cols) + "┘")
    return "\n".join(lines)
