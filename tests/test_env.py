from __future__ import annotations

import numpy as np
import pytest

from connectfour.game.rules import ConnectFourEnv


def test_reset_returns_empty_observation() -> None:
    env = ConnectFourEnv()
    obs, info = env.reset(seed=0)

    assert obs.shape == (6, 7)
    assert obs.dtype == np.int8
    assert not obs.any()
    assert env.observation_space.contains(obs)
    assert env.action_space.n == 7
    assert info['valid_moves'] == list(range(7))
    assert info['current_player'] == 1
    assert info['game_result'] == 'IN_PROGRESS'


def test_first_player_win_rewards() -> None:
    env = ConnectFourEnv()
    env.reset()

    for action in [0, 0, 1, 1, 2, 2]:
        _, reward, terminated, truncated, _ = env.step(action)
        assert reward == env.reward_step
        assert not terminated and not truncated

    obs, reward, terminated, truncated, info = env.step(3)
    assert reward == env.reward_win
    assert terminated and not truncated
    assert info['game_result'] == 'X_WON'
    assert info['winning_line'] == [(5, 0), (5, 1), (5, 2), (5, 3)]
    assert info['last_move'] == (5, 3)
    assert info['valid_moves'] == []
    assert env.observation_space.contains(obs)


def test_second_player_win_rewards() -> None:
    env = ConnectFourEnv(rows=4, cols=4)
    env.reset()
    for action in [0, 1, 0, 1, 2, 1, 3]:
        env.step(action)

    _, reward, terminated, _, info = env.step(1)
    assert reward == env.reward_lose
    assert terminated
    assert info['game_result'] == 'O_WON'


def test_draw_reward() -> None:
    env = ConnectFourEnv(rows=4, cols=4)
    env.reset()
    for action in [0, 0, 0, 0, 1, 1, 1, 1, 3, 2, 2, 2, 2, 3, 3]:
        env.step(action)

    _, reward, terminated, _, info = env.step(3)
    assert reward == env.reward_draw
    assert terminated
    assert info['game_result'] == 'DRAW'


def test_full_column_truncates() -> None:
    env = ConnectFourEnv(rows=4, cols=4)
    env.reset()
    for _ in range(4):
        env.step(0)

    _, reward, terminated, truncated, info = env.step(0)
    assert reward == env.reward_invalid_move
    assert not terminated and truncated
    assert info['invalid_move'] is True
    assert info['moves_made'] == 4


def test_step_after_game_over_is_invalid() -> None:
    env = ConnectFourEnv(rows=4, cols=4)
    env.reset()
    for action in [0, 1, 0, 1, 0, 1, 0]:
        env.step(action)

    _, reward, _, truncated, info = env.step(2)
    assert reward == env.reward_invalid_move
    assert truncated
    assert info['invalid_move'] is True


def test_reset_starts_a_new_game() -> None:
    env = ConnectFourEnv(rows=4, cols=4)
    env.reset()
    env.step(0)
    first_engine = env.engine

    obs, info = env.reset()
    assert env.engine is not first_engine
    assert not obs.any()
    assert info['moves_made'] == 0


def test_ascii_render() -> None:
    env = ConnectFourEnv(rows=4, cols=5, render_mode="ascii")
    env.reset()
    env.step(2)
    text = env.render()
    assert text.splitlines()[1] == " ┌───┬───┬───┬───┬───┐"
    assert " X " in text


def test_rejects_unknown_render_mode() -> None:
    with pytest.raises(ValueError):
        ConnectFourEnv(render_mode="rgb_array")
