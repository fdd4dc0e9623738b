"""Grid directions and small vector helpers.

World space is Y-up. Grid x maps to world X and grid y maps to world Z,
so cell (x, y) covers [x*cs, (x+1)*cs] x [y*cs, (y+1)*cs] on the ground plane.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Build a float 3-vector."""
    return np.array([x, y, z], dtype=float)


UP = vec3(0.0, 1.0, 0.0)


def normalized(v: np.ndarray) -> np.ndarray:
    """Unit vector along v. Zero vectors are returned unchanged."""
    length = float(np.linalg.norm(v))
    if length == 0.0:
        return v
    return v / length


class Direction(str, Enum):
    """Cardinal wall direction of a grid cell.

    Declaration order is the index order used for door locations:
    NORTH=0 (+y), EAST=1 (+x), SOUTH=2 (-y), WEST=3 (-x).
    """

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @classmethod
    def from_index(cls, index: int) -> Direction:
        return list(cls)[index % 4]

    @property
    def index(self) -> int:
        return list(Direction).index(self)

    @property
    def offset(self) -> tuple[int, int]:
        """Grid step (dx, dy) toward the neighbor on this side."""
        return _OFFSETS[self]

    @property
    def normal(self) -> np.ndarray:
        """Outward world-space normal of a wall facing this direction."""
        dx, dy = self.offset
        return vec3(float(dx), 0.0, float(dy))

    @property
    def opposite(self) -> Direction:
        return Direction.from_index(self.index + 2)


_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

# Start and end corner of each cell edge, as (x, z) multiples of the cell size,
# ordered so the edge runs left to right when seen from outside.
_EDGE_CORNERS: dict[Direction, tuple[tuple[int, int], tuple[int, int]]] = {
    Direction.NORTH: ((0, 1), (1, 1)),
    Direction.EAST: ((1, 1), (1, 0)),
    Direction.SOUTH: ((1, 0), (0, 0)),
    Direction.WEST: ((0, 0), (0, 1)),
}


def cell_edge(
    x: int, y: int, direction: Direction, cell_size: float, height: float
) -> tuple[np.ndarray, np.ndarray]:
    """World endpoints of one edge of cell (x, y) at the given height."""
    (sx0, sz0), (sx1, sz1) = _EDGE_CORNERS[direction]
    start = vec3((x + sx0) * cell_size, height, (y + sz0) * cell_size)
    end = vec3((x + sx1) * cell_size, height, (y + sz1) * cell_size)
    return start, end


def floor_segments(height: float, floor_height: float, epsilon: float = 1e-5) -> int:
    """Number of floor-tall segments needed to cover a wall of this height."""
    if height <= epsilon:
        return 0
    return math.ceil(height / floor_height - epsilon)
