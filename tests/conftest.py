from __future__ import annotations

from collections.abc import Iterator
from typing import Callable, Iterable

import pytest

from connectfour.debug import debug


@pytest.fixture(autouse=True)
def _restore_debug_level() -> Iterator[None]:
    """The debug manager is a process-wide singleton; undo configuration made by a test."""
    original = debug.level
    yield
    debug.configure(level=original, log_file="", components=[])


@pytest.fixture()
def feed_input(monkeypatch: pytest.MonkeyPatch) -> Callable[[Iterable[str]], None]:
    """Replace `input()` with a scripted sequence of answers."""

    def _feed(answers: Iterable[str]) -> None:
        it = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(it))

    return _feed
