# caverns/bsp.py
from typing import Iterator, List, Optional, Tuple

import structlog

from caverns.config import DungeonConfig
from caverns.connectivity import Corridor, connect_rooms
from caverns.grid import Grid, Rect
from caverns.room import Room
from game_rng import GameRNG

log = structlog.get_logger()

DEFAULT_CONFIG = DungeonConfig()


def _random_span(rng: GameRNG, low: float, high: float) -> int:
    """Uniform float between two bounds, in either order, truncated to int."""
    if low > high:
        low, high = high, low
    return int(rng.get_float(low, high))


class BSPNode:
    """Represents a node in the BSP tree.

    A node is either a leaf, which may hold a room, or has exactly two
    children. Children are stored as a single pair so there is no state with
    one child missing.
    """

    def __init__(self, bounds: Rect):
        if bounds.width <= 0 or bounds.height <= 0:
            log.error("Invalid BSP node bounds", bounds=bounds)
            raise ValueError("BSP node width and height must be positive integers.")
        self.bounds: Rect = bounds
        self.children: Optional[Tuple["BSPNode", "BSPNode"]] = None
        self.room: Optional[Room] = None

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "internal"
        return f"BSPNode({kind}, bounds={self.bounds})"

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def left_child(self) -> Optional["BSPNode"]:
        return self.children[0] if self.children else None

    @property
    def right_child(self) -> Optional["BSPNode"]:
        return self.children[1] if self.children else None

    def get_leaves(self) -> Iterator["BSPNode"]:
        if self.children is None:
            yield self
        else:
            for child in self.children:
                yield from child.get_leaves()

    def depth(self) -> int:
        """Number of levels below and including this node."""
        if self.children is None:
            return 1
        return 1 + max(child.depth() for child in self.children)

    def split(
        self,
        min_room_size: int,
        rng: GameRNG,
        aspect_ratio_threshold: float = DEFAULT_CONFIG.aspect_ratio_threshold,
    ) -> bool:
        """Divide this leaf into two children. Returns True if a split happened.

        Wide nodes are cut across their width (children side by side), tall
        nodes across their height (children stacked); roughly square nodes
        pick at random. Nodes too small to give both children at least
        ``min_room_size`` cells along the cut stay leaves.
        """
        if not self.is_leaf:
            return False

        # Children must keep at least one cell.
        min_room_size = max(1, min_room_size)
        x, y, width, height = self.bounds
        split_horizontally: bool
        if width / height >= aspect_ratio_threshold:
            split_horizontally = False
        elif height / width >= aspect_ratio_threshold:
            split_horizontally = True
        else:
            split_horizontally = rng.coin_flip() == "heads"

        if min(width, height) / 2 < min_room_size:
            log.debug("Split aborted: node too small", bounds=self.bounds, min_room_size=min_room_size)
            return False

        if split_horizontally:
            offset = rng.get_int(min_room_size, height - min_room_size)
            left = BSPNode(Rect(x, y, width, offset))
            right = BSPNode(Rect(x, y + offset, width, height - offset))
        else:
            offset = rng.get_int(min_room_size, width - min_room_size)
            left = BSPNode(Rect(x, y, offset, height))
            right = BSPNode(Rect(x + offset, y, width - offset, height))

        self.children = (left, right)
        log.debug(
            "Split node",
            direction="horizontal" if split_horizontally else "vertical",
            offset=offset,
            left=left.bounds,
            right=right.bounds,
        )
        return True

    def create_rooms(self, rng: GameRNG, config: DungeonConfig = DEFAULT_CONFIG) -> None:
        """Place a room inside every leaf below this node."""
        if self.children is not None:
            for child in self.children:
                child.create_rooms(rng, config)
            return

        width, height = self.bounds.width, self.bounds.height
        padding = config.room_edge_padding
        room_width = _random_span(rng, width / 2, width - config.room_size_margin)
        room_height = _random_span(rng, height / 2, height - config.room_size_margin)
        max_x = width - room_width - padding
        max_y = height - room_height - padding
        if room_width <= 0 or room_height <= 0 or max_x < padding or max_y < padding:
            log.debug(
                "Skipped room creation (too small)",
                leaf=self.bounds,
                room_width=room_width,
                room_height=room_height,
            )
            return

        # Room position is absolute in the dungeon, not relative to the leaf.
        room_x = self.bounds.x + _random_span(rng, padding, max_x)
        room_y = self.bounds.y + _random_span(rng, padding, max_y)
        self.room = Room(
            room_x,
            room_y,
            room_width,
            room_height,
            rng=rng,
            cellular_config=config.cellular,
            thickness=config.island_thickness,
        )

    def get_room(self, require_floor: bool = False) -> Optional[Room]:
        """First room in this subtree, searching the left side first.

        With ``require_floor`` rooms that ended up without any floor tiles are
        passed over.
        """
        if self.children is None:
            if self.room is not None and require_floor and self.room.is_empty:
                return None
            return self.room
        for child in self.children:
            room = child.get_room(require_floor)
            if room is not None:
                return room
        return None

    def create_corridors(
        self,
        global_grid: Grid,
        rng: GameRNG,
        thickness: int = DEFAULT_CONFIG.corridor_thickness,
    ) -> List[Corridor]:
        """Connect sibling subtrees bottom-up and return the corridors carved."""
        if self.children is None:
            return []

        left, right = self.children
        corridors = left.create_corridors(global_grid, rng, thickness)
        corridors.extend(right.create_corridors(global_grid, rng, thickness))

        left_room = left.get_room(require_floor=True)
        right_room = right.get_room(require_floor=True)
        if left_room is None or right_room is None:
            log.debug(
                "Skipping connection: child without a room",
                bounds=self.bounds,
                left_room=left_room is not None,
                right_room=right_room is not None,
            )
            return corridors

        corridor = connect_rooms(
            global_grid, left_room.floor_tiles, right_room.floor_tiles, rng, thickness
        )
        if corridor is not None:
            corridors.append(corridor)
        return corridors


__all__ = ["BSPNode"]
