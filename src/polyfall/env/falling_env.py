from __future__ import annotations

import colorsys
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from polyfall.game import Action, GameConfig, GameState


def _compute_action_mask(game: GameState) -> np.ndarray:
    mask = np.zeros((len(Action),), dtype=np.bool_)
    if not game.alive:
        return mask
    mask[Action.NONE] = True
    mask[Action.DROP] = True
    mask[Action.LEFT] = game.can_shift(True)
    mask[Action.RIGHT] = game.can_shift(False)
    mask[Action.ROTATE_CW] = game.can_rotate(True)
    mask[Action.ROTATE_CCW] = game.can_rotate(False)
    return mask


class FallingBlocksEnv(gym.Env):
    """One step applies an optional input and then one gravity drop.

    Reward is the number of rows cleared during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000,
                 invalid_action_penalty: float = 0.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = GameState.from_config(self.config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.invalid_action_penalty = float(invalid_action_penalty)

        self.observation_space = spaces.Box(
            low=-3.0, high=1.0, shape=(self.config.height, self.config.width), dtype=np.float32
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.observation()

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "rows_cleared": self.game.rows_cleared,
            "alive": self.game.alive,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.config = replace(self.config, random_seed=seed)
            self.game = GameState.from_config(self.config)
        else:
            self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        before = self.game.rows_cleared

        moved = True
        if action == Action.DROP:
            # soft drop: one extra row before gravity; landing is not a blocked input
            self.game.try_drop()
        elif action != Action.NONE:
            moved = self.game.apply(action)
        self.game.try_drop()

        self._steps += 1
        reward = float(self.game.rows_cleared - before)
        if not moved:
            reward += self.invalid_action_penalty
        terminated = not self.game.alive
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["input_applied"] = moved
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        h, w = self.game.height, self.game.width
        img = np.full((h * cell, w * cell, 3), 20, dtype=np.uint8)
        layers = [(self.game.cells(), 0.3, 0.5), (self.game.active_cells(), 0.5, 1.0)]
        for cells, lightness, saturation in layers:
            for c, x, y in cells:
                if not self.game.grid.is_inside(x, y):
                    continue
                rgb = colorsys.hls_to_rgb(c.hue, lightness, saturation)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = [int(v * 255) for v in rgb]
        return img

    def close(self) -> None:
        pass
