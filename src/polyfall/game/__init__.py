"""Game module for PolyFall.

Exports the falling-block engine and supporting classes:
- RandomSource: Seedable half-open uniform draws
- Cell, Piece: Coloured squares and immutable rotatable polyominoes
- generate_piece: Random polyomino growth by perimeter attachment
- Row, GameGrid: Board rows, placement checks and row clearing
- GameState: Active piece, commit/clear/spawn cycle and the driver API
- DropTimer, HostConfig: Fall-rate clock used by host drivers
"""

from .rng import RandomSource
from .pieces import Cell, PlacedCell, Piece, rotate_2d
from .generator import generate_piece, center_of_mass, is_connected
from .grid import Row, GameGrid
from .core import GameState, GameConfig, Action, print_grid
from .timing import DropTimer, HostConfig

__all__ = [
    "RandomSource",
    "Cell",
    "PlacedCell",
    "Piece",
    "rotate_2d",
    "generate_piece",
    "center_of_mass",
    "is_connected",
    "Row",
    "GameGrid",
    "GameState",
    "GameConfig",
    "Action",
    "print_grid",
    "DropTimer",
    "HostConfig",
]
