from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from functools import partial
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from .generator import MAX_PIECE_SIZE, MIN_PIECE_SIZE, generate_piece
from .grid import GameGrid, ProjectedCell, Row
from .pieces import Coordinate, Piece
from .rng import RandomSource

logger = logging.getLogger(__name__)

PieceFactory = Callable[[RandomSource], Piece]


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    DROP = 5


@dataclass
class GameConfig:
    width: int = 8
    height: int = 24
    random_seed: Optional[int] = None
    min_piece_size: int = MIN_PIECE_SIZE
    max_piece_size: int = MAX_PIECE_SIZE


class GameState:
    """Board, active piece and the per-tick commit/clear/spawn cycle.

    The driver calls ``try_rotate``/``try_shift`` for input and ``try_drop``
    for gravity. Failed moves return ``False`` and leave the state untouched.
    When a piece cannot fall it is committed, full rows are cleared, and the
    next ``try_drop`` spawns a new piece. A spawn that does not fit ends the
    game; after that only ``reset`` changes anything.
    """

    def __init__(self, height: int, width: int, rng: Optional[RandomSource] = None,
                 piece_factory: Optional[PieceFactory] = None) -> None:
        self.grid = GameGrid(width, height)
        self.rng = rng or RandomSource()
        self.piece_factory: PieceFactory = piece_factory or generate_piece
        self.active_piece: Optional[Piece] = None
        self.anchor: Coordinate = (0, 0)
        self.rows_cleared = 0
        self.alive = True
        self._spawn_piece()

    @classmethod
    def from_config(cls, config: Optional[GameConfig] = None,
                    piece_factory: Optional[PieceFactory] = None) -> "GameState":
        config = config or GameConfig()
        if piece_factory is None:
            piece_factory = partial(generate_piece, min_size=config.min_piece_size,
                                    max_size=config.max_piece_size)
        return cls(config.height, config.width, RandomSource(config.random_seed), piece_factory)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def rows(self) -> List[Row]:
        return self.grid.rows

    # Placement

    def can_place(self, piece: Piece, anchor: Coordinate) -> bool:
        return self.grid.can_place(piece.project(anchor))

    def can_shift(self, leftwards: bool) -> bool:
        if not self.alive or self.active_piece is None:
            return False
        return self.can_place(self.active_piece, self._shifted_anchor(leftwards))

    def can_rotate(self, clockwise: bool) -> bool:
        if not self.alive or self.active_piece is None:
            return False
        return self.can_place(self.active_piece.rotated(clockwise), self.anchor)

    def _shifted_anchor(self, leftwards: bool) -> Coordinate:
        return self.anchor[0] + (-1 if leftwards else 1), self.anchor[1]

    # Mutators

    def try_rotate(self, clockwise: bool) -> bool:
        if not self.can_rotate(clockwise):
            return False
        assert self.active_piece is not None
        self.active_piece = self.active_piece.rotated(clockwise)
        return True

    def try_shift(self, leftwards: bool) -> bool:
        if not self.can_shift(leftwards):
            return False
        self.anchor = self._shifted_anchor(leftwards)
        return True

    def try_drop(self) -> bool:
        """Advance the active piece one row.

        Returns ``True`` only when the piece actually fell. Landing commits
        the piece and clears rows; an empty slot spawns the next piece.
        """
        if not self.alive:
            return False
        if self.active_piece is None:
            self._spawn_piece()
            return False
        below = (self.anchor[0], self.anchor[1] + 1)
        if self.can_place(self.active_piece, below):
            self.anchor = below
            return True
        self._commit_active_piece()
        self._clear_finished_rows()
        return False

    def apply(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.try_shift(True)
        if action == Action.RIGHT:
            return self.try_shift(False)
        if action == Action.ROTATE_CW:
            return self.try_rotate(True)
        if action == Action.ROTATE_CCW:
            return self.try_rotate(False)
        if action == Action.DROP:
            return self.try_drop()
        return False

    def reset(self) -> None:
        """Empty the board, zero the counter and spawn a fresh piece.

        The random source keeps its state.
        """
        self.grid.reset()
        self.active_piece = None
        self.anchor = (0, 0)
        self.rows_cleared = 0
        self.alive = True
        logger.info("game reset")
        self._spawn_piece()

    # Cycle steps

    def _commit_active_piece(self) -> None:
        if self.active_piece is None:
            return
        self.grid.write(self.active_piece.project(self.anchor))
        self.active_piece = None

    def _clear_finished_rows(self) -> int:
        cleared = self.grid.clear_finished_rows()
        self.rows_cleared += cleared
        return cleared

    def _spawn_piece(self) -> None:
        piece = self.piece_factory(self.rng)
        anchor = (self.width // 2, piece.clearance())
        if not self.can_place(piece, anchor):
            self.alive = False
            self.active_piece = None
            logger.info("game over after %d cleared row(s)", self.rows_cleared)
            return
        self.active_piece = piece
        self.anchor = anchor
        logger.debug("spawned %d-cell piece at %s", len(piece), anchor)

    # Queries

    def cells(self) -> Iterator[ProjectedCell]:
        return self.grid.occupied()

    def active_cells(self) -> List[ProjectedCell]:
        if self.active_piece is None:
            return []
        return self.active_piece.project(self.anchor)

    def to_array(self) -> np.ndarray:
        return self.grid.to_array()

    def observation(self) -> np.ndarray:
        """Grid hues with the active piece overlaid as ``-(2 + hue)``."""
        state = self.grid.to_array()
        for cell, x, y in self.active_cells():
            if self.grid.is_inside(x, y):
                state[y, x] = -(2.0 + cell.hue)
        return state

    def render_text(self) -> str:
        active = {(x, y) for _, x, y in self.active_cells()}
        lines = []
        for y, row in enumerate(self.rows):
            chars = []
            for x, cell in enumerate(row.cells):
                if (x, y) in active:
                    chars.append("▒")
                elif cell is not None:
                    chars.append("█")
                else:
                    chars.append("·")
            lines.append("".join(chars))
        return "\n".join(lines)


def print_grid(game: GameState) -> None:
    print(game.render_text())


def run_game_demo(seed: int = 0, drops: int = 40) -> Tuple[int, bool]:  # pragma: no cover
    game = GameState.from_config(GameConfig(width=8, height=12, random_seed=seed))
    print("=== Falling Block Demo ===")
    print_grid(game)
    for _ in range(drops):
        if not game.alive:
            break
        game.try_drop()
    print("\nAfter drops:")
    print_grid(game)
    print(f"Rows cleared: {game.rows_cleared}, alive: {game.alive}")
    return game.rows_cleared, game.alive


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()
