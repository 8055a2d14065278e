# caverns/room.py
from typing import List, Optional

import structlog

from caverns import cellular
from caverns.bresenham import DEFAULT_THICKNESS
from caverns.config import CellularConfig
from caverns.connectivity import (
    collect_floor_tiles,
    connect_room_islands,
    find_room_islands,
)
from caverns.grid import TILE_ID_FLOOR, Coord, Grid, Rect
from game_rng import GameRNG

log = structlog.get_logger()


class Room:
    """A cave-like room generated inside a BSP leaf.

    The room keeps its own local grid, smoothed by the cellular automaton and
    repaired so that its floor is a single 4-connected region, plus the list
    of floor tiles in dungeon coordinates.
    """

    def __init__(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        rng: Optional[GameRNG] = None,
        cellular_config: Optional[CellularConfig] = None,
        thickness: int = DEFAULT_THICKNESS,
    ):
        if width <= 0 or height <= 0:
            log.error("Invalid room dimensions", x=x, y=y, width=width, height=height)
            raise ValueError("Room width and height must be positive integers.")
        if rng is None:
            rng = GameRNG()
        if cellular_config is None:
            cellular_config = CellularConfig()

        self.bounds = Rect(x, y, width, height)
        self.grid: Grid = cellular.smooth_noise(width, height, cellular_config, rng)

        islands = find_room_islands(self.grid)
        bridges = connect_room_islands(self.grid, islands, thickness)
        self.floor_tiles: List[Coord] = collect_floor_tiles(self.grid, self.bounds)
        log.debug(
            "Room generated",
            bounds=self.bounds,
            islands=len(islands),
            bridges=bridges,
            floor_tiles=len(self.floor_tiles),
        )

    def __repr__(self) -> str:
        return f"Room(bounds={self.bounds}, floor_tiles={len(self.floor_tiles)})"

    @property
    def center(self) -> Coord:
        return self.bounds.center

    @property
    def is_empty(self) -> bool:
        """True if smoothing left no floor at all."""
        return not self.floor_tiles

    def contains_tile(self, x: int, y: int) -> bool:
        """True if dungeon cell ``(x, y)`` is one of this room's floor tiles."""
        if not self.bounds.contains_point(x, y):
            return False
        return self.grid[x - self.bounds.x, y - self.bounds.y] == TILE_ID_FLOOR

    def random_floor_tile(self, rng: GameRNG) -> Optional[Coord]:
        """Pick a floor tile, e.g. as a spawn point. ``None`` for an empty room."""
        if not self.floor_tiles:
            return None
        return rng.choice(self.floor_tiles)

    def translate_to_global_grid(self, dungeon_grid: Grid) -> int:
        """Mark this room's floor tiles on the dungeon grid.

        Tiles falling outside the dungeon are skipped. Returns how many tiles
        were written.
        """
        written = 0
        for x, y in self.floor_tiles:
            if dungeon_grid.in_bounds(x, y):
                dungeon_grid[x, y] = TILE_ID_FLOOR
                written += 1
        skipped = len(self.floor_tiles) - written
        if skipped:
            log.debug("Skipped out-of-bounds room tiles", bounds=self.bounds, skipped=skipped)
        return written


__all__ = ["Room"]
