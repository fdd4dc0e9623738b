"""Flat roof: a cap per cell plus a parapet wherever the roof drops off.

Flat-roof geometry shares the wall material, so everything here goes to
the wall stream.
"""

from __future__ import annotations

import numpy as np

from building_mesh.generators.primitives import emit_quad
from building_mesh.models.config import BuildingConfig
from building_mesh.models.geometry import UP, Direction, cell_edge, vec3
from building_mesh.models.mesh import Material, MeshStreams


def build_flat_roof(
    streams: MeshStreams,
    footprint: np.ndarray,
    heights: np.ndarray,
    config: BuildingConfig,
) -> int:
    """Emit roof caps and parapets for every occupied cell.

    A parapet is raised on each side whose neighbor is missing or has fewer
    floors. It is a thin fin: the outward face plus the same quad wound the
    other way as its inner face. The fin has no horizontal top cap; its
    "cap" is that inner face, with an inward normal so winding stays
    consistent.

    Returns:
        Number of parapet fins emitted.
    """
    wall = streams[Material.WALL]
    cs = config.cell_size
    uv = config.uv_scale
    width, depth = footprint.shape
    cells = [(x, y) for x in range(width) for y in range(depth) if footprint[x, y]]

    for x, y in cells:
        top = float(heights[x, y]) * config.floor_height
        emit_quad(
            wall,
            vec3(x * cs, top, y * cs),
            vec3((x + 1) * cs, top, y * cs),
            vec3((x + 1) * cs, top, (y + 1) * cs),
            vec3(x * cs, top, (y + 1) * cs),
            UP,
            uv,
        )

    fins = 0
    lift = UP * config.parapet_height
    for x, y in cells:
        top = float(heights[x, y]) * config.floor_height
        for direction in Direction:
            if not _drops_off(footprint, heights, x, y, direction):
                continue
            bl, br = cell_edge(x, y, direction, cs, top)
            tl, tr = bl + lift, br + lift
            emit_quad(wall, bl, br, tr, tl, direction.normal, uv)
            emit_quad(wall, tl, tr, br, bl, -direction.normal, uv)
            fins += 1

    return fins


def _drops_off(
    footprint: np.ndarray, heights: np.ndarray, x: int, y: int, direction: Direction
) -> bool:
    """True when the neighbor on this side is missing or has fewer floors."""
    dx, dy = direction.offset
    nx, ny = x + dx, y + dy
    width, depth = footprint.shape
    if not (0 <= nx < width and 0 <= ny < depth) or not footprint[nx, ny]:
        return True
    return heights[nx, ny] < heights[x, y]
