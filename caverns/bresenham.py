"""caverns/bresenham.py

Bresenham line rasteriser used to carve corridors, both between islands
inside a room and between rooms on the dungeon grid.
"""

from __future__ import annotations

from typing import Iterator

from caverns.grid import TILE_ID_FLOOR, Coord, Grid

DEFAULT_THICKNESS = 3


def line_points(start: Coord, end: Coord) -> Iterator[Coord]:
    """Yield every point Bresenham steps through, ``start`` and ``end`` included."""
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def stamp_disk(grid: Grid, cx: int, cy: int, radius: int) -> None:
    """Mark every in-bounds cell within ``radius`` of ``(cx, cy)`` as floor."""
    tiles = grid.tiles
    r2 = radius * radius
    for dy in range(-radius, radius + 1):
        ny = cy + dy
        if not 0 <= ny < grid.height:
            continue
        for dx in range(-radius, radius + 1):
            nx = cx + dx
            if 0 <= nx < grid.width and dx * dx + dy * dy <= r2:
                tiles[ny, nx] = TILE_ID_FLOOR


def draw(grid: Grid, start: Coord, end: Coord, thickness: int = DEFAULT_THICKNESS) -> None:
    """Carve a line of floor from ``start`` to ``end`` into ``grid``.

    Each stepped point is stamped with a disk of radius ``(thickness - 1) // 2``.
    A one-cell line also fills the corner of every diagonal step so the
    result stays walkable with 4-way movement.
    """
    radius = max(0, (thickness - 1) // 2)
    prev = None
    for x, y in line_points(start, end):
        if radius == 0 and prev is not None and prev[0] != x and prev[1] != y:
            stamp_disk(grid, x, prev[1], 0)
        stamp_disk(grid, x, y, radius)
        prev = (x, y)


__all__ = ["DEFAULT_THICKNESS", "line_points", "stamp_disk", "draw"]
