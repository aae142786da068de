"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, win detection and the
turn state machine of a single game.
"""

from connectfour.game.board import Board
from connectfour.game.results import GameResult, MoveResult
from connectfour.game.rules import (GameEngine, ConnectFourEnv, create_game,
                                    check_win, find_winning_line)

__all__ = ['Board', 'GameResult', 'MoveResult', 'GameEngine', 'ConnectFourEnv',
           'create_game', 'check_win', 'find_winning_line']
