"""caverns/cellular.py

Cellular automaton used to shape each room's interior.

A room starts as random noise (floor with probability ``density``%) and is
smoothed by repeatedly applying a 4/5 rule over the Moore neighbourhood:

* a wall stays a wall if at least ``survival_limit`` neighbours are walls,
  otherwise it opens up into floor;
* a floor turns into a wall if at least ``birth_limit`` neighbours are walls.

Cells outside the grid count as walls, so rooms close in on their edges
instead of bleeding out of their bounds.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import structlog

from caverns.config import CellularConfig
from caverns.grid import TILE_ID_FLOOR, TILE_ID_WALL, Grid
from game_rng import GameRNG

log = structlog.get_logger()

DEFAULT_CELLULAR = CellularConfig()

# Offsets of the eight Moore neighbours.
_MOORE_OFFSETS = tuple(
    (dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)
)


def generate_noise_grid(
    width: int,
    height: int,
    density: int = DEFAULT_CELLULAR.density,
    rng: Optional[GameRNG] = None,
) -> Grid:
    """Random wall/floor grid; each cell is floor when a roll in [0, 100) < density."""
    if rng is None:
        rng = GameRNG()
    grid = Grid(width, height)
    rolls = rng.get_int_array(0, 99, (height, width))
    grid.tiles[:, :] = np.where(rolls < density, TILE_ID_FLOOR, TILE_ID_WALL)
    log.debug(
        "Generated noise grid",
        width=width,
        height=height,
        density=density,
        floors=grid.floor_count(),
    )
    return grid


def count_wall_neighbours(tiles: np.ndarray) -> np.ndarray:
    """Number of wall cells among the 8 neighbours of every cell.

    The array is padded with walls so border cells see out-of-bounds
    neighbours as walls.
    """
    height, width = tiles.shape
    walls = np.pad(tiles == TILE_ID_WALL, 1, mode="constant", constant_values=True)
    counts = np.zeros((height, width), dtype=np.uint8)
    for dy, dx in _MOORE_OFFSETS:
        counts += walls[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
    return counts


def apply_rules(
    grid: Grid,
    iterations: int = DEFAULT_CELLULAR.iterations,
    birth_limit: int = DEFAULT_CELLULAR.birth_limit,
    survival_limit: int = DEFAULT_CELLULAR.survival_limit,
) -> Grid:
    """Smooth ``grid`` for ``iterations`` generations and return the result.

    Every generation reads only from the previous one; the input grid is left
    untouched.
    """
    tiles = grid.tiles.copy()
    for _ in range(iterations):
        wall_neighbours = count_wall_neighbours(tiles)
        is_wall = tiles == TILE_ID_WALL
        becomes_wall = np.where(
            is_wall,
            wall_neighbours >= survival_limit,
            wall_neighbours >= birth_limit,
        )
        tiles = np.where(becomes_wall, TILE_ID_WALL, TILE_ID_FLOOR).astype(np.uint8)
    return Grid.from_array(tiles)


def smooth_noise(
    width: int,
    height: int,
    config: CellularConfig = DEFAULT_CELLULAR,
    rng: Optional[GameRNG] = None,
) -> Grid:
    """Noise generation followed by smoothing, as used for room interiors."""
    noise = generate_noise_grid(width, height, config.density, rng)
    return apply_rules(noise, config.iterations, config.birth_limit, config.survival_limit)


__all__ = [
    "generate_noise_grid",
    "count_wall_neighbours",
    "apply_rules",
    "smooth_noise",
]
