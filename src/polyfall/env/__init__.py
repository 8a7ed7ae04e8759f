"""Gymnasium environments for PolyFall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 8x24 falling-block environment
register(
    id="PolyFall-8x24-v0",
    entry_point="polyfall.env.falling_env:FallingBlocksEnv",
)

__all__ = ["PolyFall-8x24-v0"]
