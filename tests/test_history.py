from __future__ import annotations

import datetime
from pathlib import Path

import pytest

from connectfour.data.history import (append_result, clear_history, ensure_history_file,
                                      history_exists, history_sink, read_history)
from connectfour.game.results import GameResult
from connectfour.game.rules import create_game
from connectfour.utils import GameStatus, HistoryError


def _result(status: GameStatus = GameStatus.X_WON, rows: int = 6, cols: int = 7) -> GameResult:
    return GameResult(datetime.datetime(2026, 1, 2, 3, 4, 5), rows, cols, status)


def test_result_line_format() -> None:
    assert _result().to_line() == "Game at 2026-01-02 03:04:05 | Board: 6x7 | Result: Player X won"
    assert _result(GameStatus.O_WON, 4, 5).to_line().endswith("Board: 4x5 | Result: Player O won")
    assert _result(GameStatus.DRAW).to_line().endswith("Result: Draw")


def test_result_requires_finished_game() -> None:
    with pytest.raises(ValueError):
        _result(GameStatus.IN_PROGRESS)


def test_missing_history_reads_empty(tmp_path: Path) -> None:
    path = str(tmp_path / "history.txt")
    assert not history_exists(path)
    assert read_history(path) == []


def test_ensure_creates_file_and_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "history.txt"
    ensure_history_file(str(path))
    assert path.exists()
    assert path.read_text() == ""

    append_result(_result(), str(path))
    ensure_history_file(str(path))
    assert len(read_history(str(path))) == 1


def test_append_and_read_in_order(tmp_path: Path) -> None:
    path = str(tmp_path / "history.txt")
    append_result(_result(GameStatus.X_WON), path)
    append_result(_result(GameStatus.DRAW, 4, 4), path)

    assert read_history(path) == [
        "Game at 2026-01-02 03:04:05 | Board: 6x7 | Result: Player X won",
        "Game at 2026-01-02 03:04:05 | Board: 4x4 | Result: Draw",
    ]


def test_clear_history(tmp_path: Path) -> None:
    path = str(tmp_path / "history.txt")
    assert clear_history(path) is False

    append_result(_result(), path)
    assert clear_history(path) is True
    assert history_exists(path)
    assert read_history(path) == []


def test_sink_records_finished_engine_game(tmp_path: Path) -> None:
    path = str(tmp_path / "history.txt")
    engine = create_game(6, 7, on_result=history_sink(path),
                         started_at=datetime.datetime(2026, 5, 6, 7, 8, 9))
    for col in [0, 0, 1, 1, 2, 2, 3]:
        engine.attempt_move(col)

    assert read_history(path) == ["Game at 2026-05-06 07:08:09 | Board: 6x7 | Result: Player X won"]


def test_unwritable_history_raises(tmp_path: Path) -> None:
    target = tmp_path / "is_a_directory"
    target.mkdir()
    with pytest.raises(HistoryError):
        append_result(_result(), str(target))
