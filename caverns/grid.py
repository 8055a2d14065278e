# caverns/grid.py
from typing import Final, List, NamedTuple, Sequence, Tuple

import numpy as np
import structlog

log = structlog.get_logger()

TILE_ID_WALL: Final[int] = 0
TILE_ID_FLOOR: Final[int] = 1

Coord = Tuple[int, int]


class Rect(NamedTuple):
    """Axis-aligned rectangle. ``x2``/``y2`` are exclusive."""
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Coord:
        return self.x + self.width // 2, self.y + self.height // 2

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.x2 and self.y <= y < self.y2

    def contains_rect(self, other: "Rect") -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.x2 <= self.x2
            and other.y2 <= self.y2
        )

    def intersects(self, other: "Rect") -> bool:
        return not (
            self.x2 <= other.x
            or self.x >= other.x2
            or self.y2 <= other.y
            or self.y >= other.y2
        )


class Grid:
    """Binary wall/floor matrix addressed as ``grid[x, y]``.

    Cells live in ``tiles`` with shape ``(height, width)`` so the array reads
    row by row like the rest of the numpy code. Access through ``grid[x, y]``
    is bounds-checked and never wraps on negative indices.
    """

    def __init__(self, width: int, height: int, fill: int = TILE_ID_WALL):
        if width <= 0 or height <= 0:
            log.error("Invalid grid dimensions", width=width, height=height)
            raise ValueError("Grid width and height must be positive integers.")
        self._width = width
        self._height = height
        self.tiles: np.ndarray = np.full(
            (height, width), fill_value=fill, dtype=np.uint8, order="C"
        )

    @classmethod
    def from_array(cls, tiles: np.ndarray) -> "Grid":
        """Wrap a copy of a ``(height, width)`` array of tile ids."""
        if tiles.ndim != 2:
            raise ValueError("Tile array must be two-dimensional.")
        height, width = tiles.shape
        grid = cls(width, height)
        grid.tiles[:, :] = tiles
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from nested sequences indexed ``rows[x][y]``."""
        return cls.from_array(np.asarray(rows, dtype=np.uint8).T)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        return self._width, self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Cell ({x}, {y}) outside grid of size {self._width}x{self._height}"
            )

    def __getitem__(self, pos: Coord) -> int:
        x, y = pos
        self._check(x, y)
        return int(self.tiles[y, x])

    def __setitem__(self, pos: Coord, value: int) -> None:
        x, y = pos
        self._check(x, y)
        self.tiles[y, x] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.tiles, other.tiles))

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, floors={self.floor_count()})"

    def is_floor(self, x: int, y: int) -> bool:
        return self[x, y] == TILE_ID_FLOOR

    def fill(self, value: int) -> None:
        self.tiles[:, :] = value

    def copy(self) -> "Grid":
        return Grid.from_array(self.tiles)

    def floor_count(self) -> int:
        return int(np.count_nonzero(self.tiles == TILE_ID_FLOOR))

    def floor_positions(self) -> List[Coord]:
        """All floor cells in raster order (x outer, y inner)."""
        return [(int(x), int(y)) for x, y in np.argwhere(self.tiles.T == TILE_ID_FLOOR)]

    def to_text(self, floor: str = ".", wall: str = "#") -> str:
        """Plain-text dump, one line per row (y)."""
        chars = np.where(self.tiles == TILE_ID_FLOOR, floor, wall)
        return "\n".join("".join(row) for row in chars)


__all__ = ["TILE_ID_WALL", "TILE_ID_FLOOR", "Coord", "Rect", "Grid"]
