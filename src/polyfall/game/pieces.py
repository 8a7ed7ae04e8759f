from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """A coloured unit square; ``hue`` is in [0, 1)."""
    hue: float


@dataclass(frozen=True)
class PlacedCell:
    cell: Cell
    x: int
    y: int


def rotate_2d(clockwise: bool, xy: Coordinate) -> Coordinate:
    x, y = xy
    if clockwise:
        return y, -x
    return -y, x


@dataclass(frozen=True)
class Piece:
    """Connected cluster of cells around a fixed center of mass.

    Cell coordinates are relative and may be negative. The center of mass is
    the rotation pivot and the point that lands on the anchor when the piece
    is projected onto the board.
    """

    cells: Tuple[PlacedCell, ...]
    center_of_mass: Coordinate

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(self.cells))
        if not self.cells:
            raise ValueError("a piece needs at least one cell")
        cx, cy = self.center_of_mass
        if int(cx) != cx or int(cy) != cy:
            raise ValueError(f"center of mass must be integral, got {self.center_of_mass}")
        object.__setattr__(self, "center_of_mass", (int(cx), int(cy)))

    def __len__(self) -> int:
        return len(self.cells)

    def rotated(self, clockwise: bool) -> "Piece":
        cx, cy = self.center_of_mass
        cells: List[PlacedCell] = []
        for pc in self.cells:
            x, y = rotate_2d(clockwise, (pc.x - cx, pc.y - cy))
            cells.append(PlacedCell(pc.cell, x + cx, y + cy))
        return Piece(tuple(cells), self.center_of_mass)

    def project(self, anchor: Coordinate) -> List[Tuple[Cell, int, int]]:
        """Cells in board coordinates with the center of mass at ``anchor``.

        Returns a fresh list on every call.
        """
        dx = anchor[0] - self.center_of_mass[0]
        dy = anchor[1] - self.center_of_mass[1]
        return [(pc.cell, pc.x + dx, pc.y + dy) for pc in self.cells]

    def cells_relative_to_pivot(self) -> List[Coordinate]:
        cx, cy = self.center_of_mass
        return [(pc.x - cx, pc.y - cy) for pc in self.cells]

    def clearance(self) -> int:
        """Rows needed below the top edge so that no cell projects above row 0."""
        return max(0, -min(y for _, y in self.cells_relative_to_pivot()))
