"""
rules.py - Win detection, turn state machine and Gymnasium environment

This module provides:
1. Full-board win detection for a run of four
2. GameEngine, which owns one board and the turn/status state of one game
3. A gymnasium-compatible environment wrapping a fresh engine per episode
"""

import datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connectfour.debug import debug
from connectfour.utils import (CONNECT_N, DEFAULT_ROWS, DEFAULT_COLS, DIRECTION_VECTORS,
                               Cell, Player, GameStatus, GameAlreadyOverError, anchor_ranges)
from connectfour.game.board import Board
from connectfour.game.results import GameResult, MoveResult

Coord = Tuple[int, int]
ResultSink = Callable[[GameResult], None]


def find_winning_line(grid: np.ndarray, player: Player) -> Optional[List[Coord]]:
    """
    Scan the whole board for a run of CONNECT_N cells owned by the player.

    Args:
        grid: The board grid of Cell values
        player: The player to check for

    Returns:
        Coordinates of the first run found, or None if there is none
    """
    rows, cols = grid.shape
    mark = player.cell.value

    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        anchor_rows, anchor_cols = anchor_ranges(direction, rows, cols)
        for row in anchor_rows:
            for col in anchor_cols:
                line = [(row + i * dr, col + i * dc) for i in range(CONNECT_N)]
                if all(grid[r, c] == mark for r, c in line):
                    return line

    return None


def check_win(grid: np.ndarray, player: Player) -> bool:
    """Check if the player has CONNECT_N in a row anywhere on the board."""
    return find_winning_line(grid, player) is not None


class GameEngine:
    """
    Turn state machine for a single game.

    X moves first. After each placed piece the board is checked for a win by
    the mover, then for a full board; otherwise the turn passes. Once the game
    is won or drawn a GameResult is built and handed to ``on_result``.
    """

    def __init__(self, rows: int, cols: int,
                 on_result: Optional[ResultSink] = None,
                 started_at: Optional[datetime.datetime] = None):
        """
        Initialize a new game.

        Args:
            rows: Number of board rows
            cols: Number of board columns
            on_result: Optional callable receiving the GameResult when the game ends
            started_at: Start timestamp (defaults to now)

        Raises:
            InvalidDimensionError: if the board is smaller than 4x4
        """
        self.board = Board(rows, cols)
        self.current_player = Player.X
        self.status = GameStatus.IN_PROGRESS
        self.started_at = started_at or datetime.datetime.now().replace(microsecond=0)
        self.result: Optional[GameResult] = None
        self.winning_line: Optional[List[Coord]] = None
        self.last_move: Optional[Coord] = None
        self.move_count = 0
        self._on_result = on_result
        debug.debug(f"Initializing GameEngine {rows}x{cols} at {self.started_at}", "game")

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    def cell_at(self, row: int, col: int) -> Cell:
        return self.board.cell_at(row, col)

    def is_game_over(self) -> bool:
        return self.status.is_game_over()

    def valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.valid_columns()

    def attempt_move(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into a column.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            MoveResult; ``column_full`` is set when the column had no room

        Raises:
            GameAlreadyOverError: if the game has already finished
            ValueError: if the column is outside the board
        """
        if self.is_game_over():
            raise GameAlreadyOverError(f"Game is already over ({self.status.name})")

        player = self.current_player
        debug.debug(f"Attempting move in column {column} for player {player}", "game")

        row = self.board.drop(column, player)
        if row is None:
            return MoveResult(column, None, player, self.status)

        self.last_move = (row, column)
        self.move_count += 1

        debug.start_timer("win_check")
        self.winning_line = find_winning_line(self.board.grid, player)
        debug.end_timer("win_check", "game")

        if self.winning_line is not None:
            self._finish(GameStatus.won_by(player))
        elif self.board.is_full():
            self._finish(GameStatus.DRAW)
        else:
            self.current_player = player.other()
            debug.trace(f"Switching to player {self.current_player}", "game")

        return MoveResult(column, row, player, self.status)

    def _finish(self, status: GameStatus) -> None:
        self.status = status
        self.result = GameResult(self.started_at, self.rows, self.cols, status)
        debug.info(f"Game over after {self.move_count} moves: {self.result.outcome}", "game")
        if self._on_result is not None:
            self._on_result(self.result)

    def render(self) -> str:
        return self.board.render()


def create_game(rows: int, cols: int,
                on_result: Optional[ResultSink] = None,
                started_at: Optional[datetime.datetime] = None) -> GameEngine:
    """
    Create a new game with an empty board.

    Raises:
        InvalidDimensionError: if rows or cols is below 4
    """
    return GameEngine(rows, cols, on_result=on_result, started_at=started_at)


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Each episode plays one game on a fresh engine. Rewards are given from
    player X's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 render_mode: Optional[str] = None):
        """
        Initialize the Connect Four environment.

        Args:
            rows: Number of board rows
            cols: Number of board columns
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.engine = GameEngine(rows, cols)
        self.rows = rows
        self.cols = cols
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.engine = GameEngine(self.rows, self.cols)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by making a move.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        action = int(action)
        if self.engine.is_game_over() or not (0 <= action < self.cols):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        move = self.engine.attempt_move(action)
        if move.column_full:
            debug.warning(f"Invalid action: column {action} is full", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        if move.status == GameStatus.X_WON:
            reward = self.reward_win
            terminated = True
        elif move.status == GameStatus.O_WON:
            reward = self.reward_lose
            terminated = True
        elif move.status == GameStatus.DRAW:
            reward = self.reward_draw
            terminated = True

        if terminated:
            debug.info(f"Episode finished: {move.status.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.engine.valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.engine.current_player.value,
            'game_result': self.engine.status.name,
            'moves_made': self.engine.move_count,
            'winning_line': self.engine.winning_line or [],
            'last_move': self.engine.last_move
        }

    def close(self):
        """Clean up resources."""
        pass
