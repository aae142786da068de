"""
results.py - Value records produced by the game engine

GameResult is the summary handed to the history sink once a game ends;
MoveResult is what a single move attempt reports back to its caller.
"""

import datetime
from dataclasses import dataclass
from typing import Optional

from connectfour.utils import TIMESTAMP_FORMAT, GameStatus, Player


@dataclass(frozen=True)
class GameResult:
    """Summary of a finished game."""
    started_at: datetime.datetime
    rows: int
    cols: int
    status: GameStatus

    def __post_init__(self):
        if not self.status.is_game_over():
            raise ValueError("GameResult requires a finished game")

    @property
    def outcome(self) -> str:
        return self.status.outcome_text()

    def to_line(self) -> str:
        """Format the result as a single history line."""
        return (f"Game at {self.started_at.strftime(TIMESTAMP_FORMAT)} | "
                f"Board: {self.rows}x{self.cols} | Result: {self.outcome}")


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single move attempt."""
    column: int
    row: Optional[int]
    player: Player
    status: GameStatus

    @property
    def column_full(self) -> bool:
        return self.row is None
