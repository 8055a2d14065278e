"""Procedural cave dungeon generation.

Binary space partitioning carves the map into leaves, a cellular automaton
shapes a room inside each leaf, and corridors join sibling rooms so the whole
dungeon ends up as one walkable region.
"""

from caverns.bsp import BSPNode
from caverns.config import CellularConfig, DungeonConfig, load_config
from caverns.connectivity import Corridor
from caverns.generator import DungeonData, DungeonGenerator
from caverns.grid import TILE_ID_FLOOR, TILE_ID_WALL, Grid, Rect
from caverns.room import Room

__all__ = [
    "BSPNode",
    "CellularConfig",
    "Corridor",
    "DungeonConfig",
    "DungeonData",
    "DungeonGenerator",
    "Grid",
    "Rect",
    "Room",
    "TILE_ID_FLOOR",
    "TILE_ID_WALL",
    "load_config",
]

__version__ = "0.1.0"
