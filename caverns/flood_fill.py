# caverns/flood_fill.py
from collections import deque
from typing import List, Tuple

import numpy as np

from caverns.grid import TILE_ID_FLOOR, Coord, Grid

# Von Neumann neighbourhood as (dx, dy).
DIRECTIONS: Tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def new_visited(grid: Grid) -> np.ndarray:
    """Blank visitation map matching ``grid.tiles``."""
    return np.zeros((grid.height, grid.width), dtype=bool)


def run(grid: Grid, visited: np.ndarray, start: Coord) -> List[Coord]:
    """Breadth-first flood fill over floor cells from ``start``.

    ``visited`` is indexed ``[y, x]`` and shared across calls so a caller can
    scan a whole grid without revisiting cells. Returns every cell of the
    4-connected floor region containing ``start`` in BFS order.
    """
    tiles = grid.tiles
    height, width = tiles.shape
    start_x, start_y = start
    region: List[Coord] = []

    queue = deque([(start_x, start_y)])
    visited[start_y, start_x] = True
    while queue:
        cx, cy = queue.popleft()
        region.append((cx, cy))
        for dx, dy in DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if (
                0 <= nx < width
                and 0 <= ny < height
                and not visited[ny, nx]
                and tiles[ny, nx] == TILE_ID_FLOOR
            ):
                visited[ny, nx] = True
                queue.append((nx, ny))
    return region


__all__ = ["DIRECTIONS", "new_visited", "run"]
