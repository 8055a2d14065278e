"""caverns/connectivity.py

Reachability helpers: discovering floor islands, stitching them together and
joining rooms with L-shaped corridors. Every "closest" search uses Manhattan
distance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import structlog

from caverns import bresenham, flood_fill
from caverns.grid import Coord, Grid, Rect
from caverns.maths import manhattan_distance
from game_rng import GameRNG

log = structlog.get_logger()

Island = List[Coord]

_MAX_BLOCK_CELLS = 1_000_000


@dataclass(frozen=True)
class Corridor:
    """An L-shaped connection carved between two rooms."""
    start: Coord
    corner: Coord
    end: Coord
    thickness: int = bresenham.DEFAULT_THICKNESS

    @property
    def length(self) -> int:
        """Cells stepped along both legs, not counting thickness."""
        return manhattan_distance(self.start, self.corner) + manhattan_distance(
            self.corner, self.end
        )

    @property
    def endpoints(self) -> Tuple[Coord, Coord]:
        return self.start, self.end


def find_room_islands(grid: Grid) -> List[Island]:
    """Partition every floor cell of ``grid`` into maximal 4-connected islands."""
    visited = flood_fill.new_visited(grid)
    islands: List[Island] = []
    for x, y in grid.floor_positions():
        if not visited[y, x]:
            islands.append(flood_fill.run(grid, visited, (x, y)))
    return islands


def find_closest_tiles(
    tiles_a: Sequence[Coord], tiles_b: Sequence[Coord]
) -> Optional[Tuple[Coord, Coord]]:
    """Closest pair between two tile sets by Manhattan distance.

    The search is exhaustive; ties go to the first pair met scanning
    ``tiles_a`` in the outer loop and ``tiles_b`` in the inner one. Returns
    ``None`` if either set is empty.
    """
    if len(tiles_a) == 0 or len(tiles_b) == 0:
        return None
    a = np.asarray(tiles_a, dtype=np.int64)
    b = np.asarray(tiles_b, dtype=np.int64)

    best_distance = None
    best_pair = (0, 0)
    # Bound the size of each distance block for very large islands.
    rows_per_chunk = max(1, _MAX_BLOCK_CELLS // len(b))
    for offset in range(0, len(a), rows_per_chunk):
        chunk = a[offset : offset + rows_per_chunk]
        distances = np.abs(chunk[:, None, 0] - b[None, :, 0]) + np.abs(
            chunk[:, None, 1] - b[None, :, 1]
        )
        flat_index = int(np.argmin(distances))
        distance = int(distances.flat[flat_index])
        if best_distance is None or distance < best_distance:
            ia, ib = divmod(flat_index, len(b))
            best_distance = distance
            best_pair = (offset + ia, ib)
            if distance == 0:
                break

    ia, ib = best_pair
    return (int(a[ia, 0]), int(a[ia, 1])), (int(b[ib, 0]), int(b[ib, 1]))


def connect_room_islands(
    grid: Grid,
    islands: List[Island],
    thickness: int = bresenham.DEFAULT_THICKNESS,
) -> int:
    """Join every island to the largest one, greedily, in place.

    Islands are taken largest first. Each one is linked to the closest cell of
    the growing main region by a Bresenham line and then merged into it, so
    later islands can attach to anything already connected. Returns the number
    of lines drawn.
    """
    if len(islands) <= 1:
        return 0

    islands.sort(key=len, reverse=True)
    main_island = list(islands[0])
    for island in islands[1:]:
        main_tile, island_tile = find_closest_tiles(main_island, island)
        bresenham.draw(grid, main_tile, island_tile, thickness)
        log.debug(
            "Connected island",
            island_size=len(island),
            main_size=len(main_island),
            start=main_tile,
            end=island_tile,
        )
        main_island.extend(island)
    return len(islands) - 1


def collect_floor_tiles(grid: Grid, bounds: Rect) -> List[Coord]:
    """Floor cells of a local grid translated to dungeon coordinates."""
    return [(bounds.x + x, bounds.y + y) for x, y in grid.floor_positions()]


def connect_rooms(
    dungeon_grid: Grid,
    left_room_tiles: Sequence[Coord],
    right_room_tiles: Sequence[Coord],
    rng: GameRNG,
    thickness: int = bresenham.DEFAULT_THICKNESS,
) -> Optional[Corridor]:
    """Carve an L-shaped corridor between the closest tiles of two rooms."""
    closest = find_closest_tiles(left_room_tiles, right_room_tiles)
    if closest is None:
        log.debug(
            "Skipping room connection: no floor tiles",
            left_tiles=len(left_room_tiles),
            right_tiles=len(right_room_tiles),
        )
        return None
    start, end = closest

    if rng.coin_flip() == "heads":  # horizontal first
        corner = (end[0], start[1])
    else:  # vertical first
        corner = (start[0], end[1])

    bresenham.draw(dungeon_grid, start, corner, thickness)
    bresenham.draw(dungeon_grid, corner, end, thickness)
    corridor = Corridor(start, corner, end, thickness)
    log.debug("Carved corridor", start=start, corner=corner, end=end, length=corridor.length)
    return corridor


__all__ = [
    "Corridor",
    "Island",
    "find_room_islands",
    "find_closest_tiles",
    "connect_room_islands",
    "collect_floor_tiles",
    "connect_rooms",
]
