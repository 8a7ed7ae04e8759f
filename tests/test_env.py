import numpy as np
import gymnasium as gym
import pytest

import polyfall.env  # noqa: F401
from polyfall.env.falling_env import FallingBlocksEnv, _compute_action_mask
from polyfall.game import Action, GameConfig
from polyfall.rl.random_agent import run_random


def test_make_and_reset():
    env = gym.make("PolyFall-8x24-v0")
    obs, info = env.reset(seed=0)
    assert obs.shape == (24, 8)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["alive"]
    assert info["rows_cleared"] == 0
    assert info["action_mask"][Action.NONE]
    assert info["action_mask"][Action.DROP]
    env.close()


def test_seeded_resets_are_reproducible():
    a = FallingBlocksEnv()
    b = FallingBlocksEnv()
    obs_a, _ = a.reset(seed=4)
    obs_b, _ = b.reset(seed=4)
    assert np.array_equal(obs_a, obs_b)


def test_drop_only_play_terminates():
    env = FallingBlocksEnv(GameConfig(width=6, height=10))
    env.reset(seed=1)
    for _ in range(2000):
        obs, reward, terminated, truncated, info = env.step(Action.DROP)
        assert reward >= 0.0
        if terminated:
            break
    assert terminated
    assert not info["alive"]
    assert not info["action_mask"].any()


def test_blocked_input_is_reported():
    env = FallingBlocksEnv(GameConfig(width=4, height=10), invalid_action_penalty=-0.5)
    env.reset(seed=2)
    rewards = []
    for _ in range(6):
        _, reward, _, _, info = env.step(Action.LEFT)
        rewards.append((reward, info["input_applied"]))
    assert any(not applied and reward == -0.5 for reward, applied in rewards)


def test_truncation():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(Action.NONE) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_action_mask_matches_probes():
    env = FallingBlocksEnv()
    env.reset(seed=3)
    game = env.game
    mask = _compute_action_mask(game)
    assert mask[Action.LEFT] == game.can_shift(True)
    assert mask[Action.RIGHT] == game.can_shift(False)
    assert mask[Action.ROTATE_CW] == game.can_rotate(True)
    assert mask[Action.ROTATE_CCW] == game.can_rotate(False)


def test_rgb_render():
    env = FallingBlocksEnv(GameConfig(width=5, height=6), render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (72, 60, 3)
    assert img.dtype == np.uint8
    assert (img != 20).any()


def test_random_agent_runs():
    assert run_random(steps=50, seed=0) >= 0.0


def test_drop_falls_faster_than_idle():
    soft = FallingBlocksEnv()
    idle = FallingBlocksEnv()
    soft.reset(seed=5)
    idle.reset(seed=5)
    start = soft.game.anchor
    obs_soft, _, _, _, info = soft.step(Action.DROP)
    obs_idle, _, _, _, _ = idle.step(Action.NONE)
    assert info["input_applied"]
    assert soft.game.anchor == (start[0], start[1] + 2)
    assert idle.game.anchor == (start[0], start[1] + 1)
    assert not np.array_equal(obs_soft, obs_idle)
