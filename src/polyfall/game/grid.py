from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .pieces import Cell

logger = logging.getLogger(__name__)

ProjectedCell = Tuple[Cell, int, int]

EMPTY_VALUE = -1.0


class Row:
    """One horizontal line of the board.

    ``is_empty`` is cached and must agree with ``cells`` after every write
    or clear.
    """

    def __init__(self, width: int) -> None:
        self.cells: List[Optional[Cell]] = [None] * width
        self.is_empty = True

    def __len__(self) -> int:
        return len(self.cells)

    def is_full(self) -> bool:
        return all(c is not None for c in self.cells)

    def set(self, x: int, cell: Cell) -> None:
        self.cells[x] = cell
        self.is_empty = False

    def clear(self) -> None:
        for x in range(len(self.cells)):
            self.cells[x] = None
        self.is_empty = True


class GameGrid:
    """Fixed-size stack of rows; row 0 is the top of the board.

    Rows are addressed by index and moved by swapping, so a Row object keeps
    its identity while it falls.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board must be at least 1x1, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.rows: List[Row] = [Row(self.width) for _ in range(self.height)]

    def reset(self) -> None:
        for row in self.rows:
            row.clear()

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        return self.rows[y].cells[x]

    def can_place(self, cells: Iterable[ProjectedCell]) -> bool:
        for _, x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.rows[y].cells[x] is not None:
                return False
        return True

    def write(self, cells: Iterable[ProjectedCell]) -> None:
        """Commit cells into the grid. Positions must have passed ``can_place``."""
        for cell, x, y in cells:
            assert self.is_inside(x, y), f"write outside the board at ({x}, {y})"
            assert self.rows[y].cells[x] is None, f"write over an occupied slot at ({x}, {y})"
            self.rows[y].set(x, cell)

    def _collapse_into(self, index: int) -> None:
        # Bubble the emptied row upwards until it meets the top or another empty row.
        for i in range(index, 0, -1):
            if self.rows[i - 1].is_empty:
                break
            self.rows[i], self.rows[i - 1] = self.rows[i - 1], self.rows[i]

    def clear_finished_rows(self) -> int:
        """Clear every full row and drop the rows above it by one.

        Scans top to bottom and repeats the scan until a pass clears nothing.
        Returns the number of rows cleared.
        """
        total = 0
        changed = True
        while changed:
            changed = False
            for i in range(self.height):
                row = self.rows[i]
                if row.is_empty or not row.is_full():
                    continue
                row.clear()
                total += 1
                changed = True
                self._collapse_into(i)
        if total:
            logger.debug("cleared %d row(s)", total)
        return total

    def occupied(self) -> Iterator[ProjectedCell]:
        for y, row in enumerate(self.rows):
            if row.is_empty:
                continue
            for x, cell in enumerate(row.cells):
                if cell is not None:
                    yield cell, x, y

    def to_array(self) -> np.ndarray:
        """Hue matrix of shape (height, width); empty slots hold ``EMPTY_VALUE``."""
        grid = np.full((self.height, self.width), EMPTY_VALUE, dtype=np.float32)
        for cell, x, y in self.occupied():
            grid[y, x] = cell.hue
        return grid
