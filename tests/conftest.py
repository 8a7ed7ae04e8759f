import os
import sys
from itertools import chain, repeat
from typing import Iterable, Sequence, Tuple

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from polyfall.game import Cell, Piece, PlacedCell  # noqa: E402


def make_piece(coords: Iterable[Tuple[int, int]], center=(0, 0), hue: float = 0.5) -> Piece:
    cell = Cell(hue)
    return Piece(tuple(PlacedCell(cell, x, y) for x, y in coords), center)


def piece_sequence(pieces: Sequence[Piece]):
    """Piece factory that hands out ``pieces`` in order, then repeats the last one."""
    it = chain(pieces, repeat(pieces[-1]))

    def factory(_rng):
        return next(it)

    return factory


@pytest.fixture
def horizontal_four() -> Piece:
    return make_piece([(0, 0), (1, 0), (2, 0), (3, 0)], center=(2, 0))


@pytest.fixture
def vertical_domino() -> Piece:
    return make_piece([(0, 0), (0, 1)])


@pytest.fixture
def t_piece() -> Piece:
    return make_piece([(-1, 0), (0, 0), (1, 0), (0, 1)])
