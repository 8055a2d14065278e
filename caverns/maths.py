"""caverns/maths.py

Distance helpers shared by the connectivity routines.
"""

from typing import Tuple


def manhattan_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Return ``|ax - bx| + |ay - by|``."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


__all__ = ["manhattan_distance"]
