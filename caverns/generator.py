"""caverns/generator.py

Top-level dungeon generation pipeline.

Generation runs in sequential phases, each finishing before the next begins:

1. partition the dungeon bounds into a BSP tree;
2. create a cave-like room in every leaf;
3. connect sibling subtrees with L-shaped corridors on the dungeon grid;
4. collect the rooms and project their floor onto the dungeon grid.

The result is a :class:`DungeonData`, the only thing renderers or spawners
need to read.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

import structlog

from caverns.bsp import BSPNode
from caverns.config import DungeonConfig
from caverns.connectivity import Corridor
from caverns.grid import TILE_ID_FLOOR, TILE_ID_WALL, Grid, Rect
from caverns.room import Room
from game_rng import GameRNG

log = structlog.get_logger()


@dataclass
class DungeonData:
    """Generated dungeon: the global grid plus room and corridor metadata."""
    width: int
    height: int
    grid: Grid
    rooms: List[Room] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)
    seed: Optional[int] = None

    def is_walkable(self, x: int, y: int) -> bool:
        return self.grid.in_bounds(x, y) and self.grid[x, y] == TILE_ID_FLOOR

    def floor_count(self) -> int:
        return self.grid.floor_count()

    def room_at(self, x: int, y: int) -> Optional[Room]:
        """The room owning floor tile ``(x, y)``, if any."""
        for room in self.rooms:
            if room.contains_tile(x, y):
                return room
        return None


class DungeonGenerator:
    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        min_node_size: Optional[int] = None,
        max_node_size: Optional[int] = None,
        config: Optional[DungeonConfig] = None,
        rng: Optional[GameRNG] = None,
    ):
        """Store the configuration and allocate an all-wall dungeon.

        Explicit size arguments override the matching ``config`` values.
        Without an injected ``rng`` one is created from ``config.seed``.
        """
        config = config if config is not None else DungeonConfig()
        overrides = {
            key: value
            for key, value in (
                ("width", width),
                ("height", height),
                ("min_node_size", min_node_size),
                ("max_node_size", max_node_size),
            )
            if value is not None
        }
        self.config: DungeonConfig = replace(config, **overrides)
        self.rng: GameRNG = rng if rng is not None else GameRNG(seed=self.config.seed)
        self.root: Optional[BSPNode] = None
        self.dungeon = self._new_dungeon()

    @classmethod
    def from_config(cls, config: DungeonConfig, rng: Optional[GameRNG] = None) -> "DungeonGenerator":
        return cls(config=config, rng=rng)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def _new_dungeon(self) -> DungeonData:
        return DungeonData(
            width=self.width,
            height=self.height,
            grid=Grid(self.width, self.height, fill=TILE_ID_WALL),
            seed=self.rng.initial_seed,
        )

    def partition(self, node: BSPNode) -> None:
        """Recursively split ``node`` while it is too big or the dice say so."""
        if not node.is_leaf:
            return
        bounds = node.bounds
        if (
            bounds.width > self.config.max_node_size
            or bounds.height > self.config.max_node_size
            or self.rng.get_float() > self.config.split_chance_threshold
        ):
            if node.split(
                self.config.min_node_size,
                self.rng,
                self.config.aspect_ratio_threshold,
            ):
                self.partition(node.left_child)
                self.partition(node.right_child)

    def generate_dungeon(self) -> DungeonData:
        """Run every generation phase and return the finished dungeon."""
        log.info(
            "Starting dungeon generation",
            width=self.width,
            height=self.height,
            min_node_size=self.config.min_node_size,
            max_node_size=self.config.max_node_size,
            seed=self.rng.initial_seed,
        )
        self.dungeon = self._new_dungeon()
        dungeon = self.dungeon

        root = BSPNode(Rect(0, 0, self.width, self.height))
        self.root = root

        log.info("Partitioning BSP tree...")
        self.partition(root)
        leaves = list(root.get_leaves())
        log.info("Partition finished", leaves=len(leaves), depth=root.depth())

        log.info("Creating rooms...")
        root.create_rooms(self.rng, self.config)

        log.info("Connecting rooms...")
        dungeon.corridors = root.create_corridors(
            dungeon.grid, self.rng, self.config.corridor_thickness
        )

        for leaf in leaves:
            if leaf.room is None:
                continue
            dungeon.rooms.append(leaf.room)
            leaf.room.translate_to_global_grid(dungeon.grid)

        log.info(
            "Dungeon generation complete",
            rooms=len(dungeon.rooms),
            skipped_leaves=len(leaves) - len(dungeon.rooms),
            corridors=len(dungeon.corridors),
            floor_tiles=dungeon.floor_count(),
        )
        return dungeon


__all__ = ["DungeonData", "DungeonGenerator"]
