from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HostConfig:
    """Settings owned by the host driver, not by the engine."""
    cell_size_px: int = 32
    ticks_per_drop_slow: int = 10
    ticks_per_drop_fast: int = 1
    fps: int = 60
    guide_every: int = 4


class DropTimer:
    """Counts frames and reports when gravity should pull the piece down."""

    def __init__(self, slow: int = 10, fast: int = 1) -> None:
        if slow < 1 or fast < 1:
            raise ValueError("drop thresholds must be at least one tick")
        self.slow = slow
        self.fast = fast
        self.ticks_want = slow
        self.ticks_have = 0

    @classmethod
    def from_config(cls, config: HostConfig) -> "DropTimer":
        return cls(config.ticks_per_drop_slow, config.ticks_per_drop_fast)

    def hasten(self) -> None:
        self.ticks_want = self.fast

    def relax(self) -> None:
        self.ticks_want = self.slow

    def tick(self) -> bool:
        self.ticks_have += 1
        if self.ticks_have >= self.ticks_want:
            self.ticks_have = 0
            return True
        return False
