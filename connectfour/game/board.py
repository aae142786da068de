"""
board.py - Board representation and gravity-drop placement for Connect Four

This module implements the Board class which owns the grid of cells for a
single game and provides the only operation that mutates it: dropping a piece
into a column.
"""

import numbers
from typing import List, Optional

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (MIN_ROWS, MIN_COLS, Cell, Player, InvalidDimensionError,
                               is_valid_position, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top of the board and row ``rows - 1`` the bottom, so pieces
    fall toward higher row indices. Dimensions are fixed at construction.
    """

    def __init__(self, rows: int, cols: int):
        """
        Initialize an empty board.

        Args:
            rows: Number of rows (at least MIN_ROWS)
            cols: Number of columns (at least MIN_COLS)

        Raises:
            InvalidDimensionError: if either dimension is too small
        """
        if (not isinstance(rows, numbers.Integral) or not isinstance(cols, numbers.Integral)
                or isinstance(rows, bool) or isinstance(cols, bool)
                or rows < MIN_ROWS or cols < MIN_COLS):
            debug.warning(f"Rejected board dimensions {rows}x{cols}", "board")
            raise InvalidDimensionError(rows, cols)

        debug.debug(f"Initializing new {rows}x{cols} Board", "board")
        self._rows = int(rows)
        self._cols = int(cols)
        self.grid = np.full((self._rows, self._cols), Cell.EMPTY.value, dtype=np.int8)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def drop(self, column: int, player: Player) -> Optional[int]:
        """
        Drop a piece for the player into the specified column.

        Args:
            column: The column to place a piece (0-indexed)
            player: The player whose mark is written

        Returns:
            The row the piece landed in, or None if the column is full

        Raises:
            ValueError: if the column is outside the board
        """
        if not (0 <= column < self._cols):
            raise ValueError(f"Column {column} out of range 0..{self._cols - 1}")

        # Find the lowest empty row in the column
        for row in range(self._rows - 1, -1, -1):
            if self.grid[row, column] == Cell.EMPTY.value:
                debug.trace(f"Placing {player} at position ({row}, {column})", "board")
                self.grid[row, column] = player.cell.value
                return row

        debug.debug(f"Column {column} is full", "board")
        return None

    def is_column_full(self, column: int) -> bool:
        return self.grid[0, column] != Cell.EMPTY.value

    def valid_columns(self) -> List[int]:
        """
        Get a list of columns where a piece can still be dropped.

        Returns:
            List of column indices
        """
        return [col for col in range(self._cols) if not self.is_column_full(col)]

    def is_full(self) -> bool:
        """
        Check whether the board has no room left.

        Pieces stack from the bottom, so a top row without empty cells means
        every column is full.
        """
        return bool(np.all(self.grid[0] != Cell.EMPTY.value))

    def cell_at(self, row: int, col: int) -> Cell:
        """
        Get the content of a cell.

        Raises:
            IndexError: if the position is outside the board
        """
        if not is_valid_position(row, col, self._rows, self._cols):
            raise IndexError(f"Position ({row}, {col}) outside {self._rows}x{self._cols} board")
        return Cell(int(self.grid[row, col]))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid of Cell values
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
