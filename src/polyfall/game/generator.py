from __future__ import annotations

import logging
from typing import Iterable, List, Set

import numpy as np

from .pieces import Cell, Coordinate, Piece, PlacedCell
from .rng import RandomSource

logger = logging.getLogger(__name__)

NEIGHBOR_OFFSETS = ((0, 1), (1, 0), (0, -1), (-1, 0))

MIN_PIECE_SIZE = 3
MAX_PIECE_SIZE = 5


def _neighbors(xy: Coordinate) -> List[Coordinate]:
    return [(xy[0] + dx, xy[1] + dy) for dx, dy in NEIGHBOR_OFFSETS]


def center_of_mass(coords: Iterable[Coordinate]) -> Coordinate:
    """Mean of ``coords`` rounded to the nearest integer, ties to even."""
    mean = np.rint(np.asarray(list(coords), dtype=float).mean(axis=0))
    return int(mean[0]), int(mean[1])


def is_connected(coords: Iterable[Coordinate]) -> bool:
    remaining = set(coords)
    if not remaining:
        return False
    stack = [remaining.pop()]
    while stack:
        for n in _neighbors(stack.pop()):
            if n in remaining:
                remaining.remove(n)
                stack.append(n)
    return not remaining


def generate_piece(rng: RandomSource, min_size: int = MIN_PIECE_SIZE, max_size: int = MAX_PIECE_SIZE) -> Piece:
    """Grow a random polyomino by attaching cells to its perimeter.

    Every cell shares one hue. Sites are picked by index into the candidate
    set's iteration order, so a given seed reproduces the same shapes.
    """
    if min_size < 1 or max_size < min_size:
        raise ValueError(f"invalid piece size range [{min_size}, {max_size}]")
    hue = float(rng.uniform(0.0, 1.0))
    size = int(rng.uniform(min_size, max_size + 1))

    occupied: List[Coordinate] = [(0, 0)]
    sites: Set[Coordinate] = set(_neighbors((0, 0)))
    for _ in range(size - 1):
        site = list(sites)[rng.uniform(0, len(sites))]
        occupied.append(site)
        sites.discard(site)
        sites.update(n for n in _neighbors(site) if n not in occupied)

    cell = Cell(hue)
    piece = Piece(tuple(PlacedCell(cell, x, y) for x, y in occupied), center_of_mass(occupied))
    logger.debug("generated %d-cell piece %s (hue %.3f)", size, occupied, hue)
    return piece
