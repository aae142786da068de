"""
history.py - Game history persistence for Connect Four

This module stores one human-readable line per finished game in a plain text
file. Every access holds a file lock so concurrent processes never interleave
partial lines.
"""

import os
from typing import Callable, List

import filelock

from connectfour.debug import debug
from connectfour.utils import HistoryError
from connectfour.game.results import GameResult

# Default history location, relative to the working directory
DEFAULT_HISTORY_FILE = 'game_history.txt'


def _lock_for(file_path: str) -> filelock.FileLock:
    return filelock.FileLock(f"{file_path}.lock")


def history_exists(file_path: str = DEFAULT_HISTORY_FILE) -> bool:
    return os.path.exists(file_path)


def ensure_history_file(file_path: str = DEFAULT_HISTORY_FILE) -> None:
    """
    Create an empty history file if it does not exist.

    Args:
        file_path: Path to the history file

    Raises:
        HistoryError: if the file cannot be created
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    try:
        os.makedirs(directory, exist_ok=True)
        with _lock_for(file_path):
            if not os.path.exists(file_path):
                open(file_path, 'a').close()
                debug.debug(f"Created history file {file_path}", "history")
    except OSError as e:
        debug.error(f"Could not initialize history file {file_path}: {e}", "history")
        raise HistoryError(f"Could not initialize history file: {e}") from e


def append_result(result: GameResult, file_path: str = DEFAULT_HISTORY_FILE) -> None:
    """
    Append a finished game to the history file.

    Args:
        result: The game summary to record
        file_path: Path to the history file

    Raises:
        HistoryError: if the file cannot be written
    """
    line = result.to_line()
    try:
        with _lock_for(file_path):
            with open(file_path, 'a', encoding='utf-8') as f:
                f.write(line + "\n")
    except OSError as e:
        debug.error(f"Error saving game result to {file_path}: {e}", "history")
        raise HistoryError(f"Error saving game result: {e}") from e

    debug.info(f"Recorded game result: {line}", "history")


def read_history(file_path: str = DEFAULT_HISTORY_FILE) -> List[str]:
    """
    Read all recorded games.

    Args:
        file_path: Path to the history file

    Returns:
        History lines in the order they were written (empty if no file)

    Raises:
        HistoryError: if the file exists but cannot be read
    """
    if not os.path.exists(file_path):
        return []

    try:
        with _lock_for(file_path):
            with open(file_path, 'r', encoding='utf-8') as f:
                return [line.rstrip("\n") for line in f if line.strip()]
    except OSError as e:
        debug.error(f"Error reading game history from {file_path}: {e}", "history")
        raise HistoryError(f"Error reading game history: {e}") from e


def clear_history(file_path: str = DEFAULT_HISTORY_FILE) -> bool:
    """
    Erase all recorded games, leaving an empty history file.

    Args:
        file_path: Path to the history file

    Returns:
        True if a history file was cleared, False if there was none

    Raises:
        HistoryError: if the file cannot be truncated
    """
    if not os.path.exists(file_path):
        debug.debug(f"No history file at {file_path}", "history")
        return False

    try:
        with _lock_for(file_path):
            with open(file_path, 'w', encoding='utf-8'):
                pass
    except OSError as e:
        debug.error(f"Failed to delete game history in {file_path}: {e}", "history")
        raise HistoryError(f"Failed to delete game history: {e}") from e

    debug.info(f"Cleared game history in {file_path}", "history")
    return True


def history_sink(file_path: str = DEFAULT_HISTORY_FILE) -> Callable[[GameResult], None]:
    """
    Build a callback that records results in the given history file.

    The returned callable is meant to be passed as ``on_result`` to a GameEngine.
    """
    def _record(result: GameResult) -> None:
        append_result(result, file_path)

    return _record
