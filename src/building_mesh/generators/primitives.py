"""Quad and triangle emission into a material stream.

The caller always states the normal the face should show. Triangle index
order is flipped when the corner order alone would produce the opposite
facing, so vertex order never decides visibility.
"""

from __future__ import annotations

import numpy as np

from building_mesh.models.geometry import normalized
from building_mesh.models.mesh import MeshStream

_TRIANGLE_UVS = ((0.0, 0.0), (0.5, 1.0), (1.0, 0.0))


def face_normal(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    """Unit normal of the plane through a, b, c (right-hand rule)."""
    return normalized(np.cross(b - a, c - a))


def emit_quad(
    stream: MeshStream,
    bl: np.ndarray,
    br: np.ndarray,
    tr: np.ndarray,
    tl: np.ndarray,
    normal: np.ndarray,
    uv_scale: float = 0.5,
) -> None:
    """Append a quad as two triangles facing ``normal``.

    Args:
        stream: Stream to append to.
        bl, br, tr, tl: Corners, bottom-left going around to top-left.
        normal: Desired outward normal, copied to all four vertices.
        uv_scale: Planar UV scale applied to the quad's width and height.
    """
    corners = [np.asarray(p, dtype=float) for p in (bl, br, tr, tl)]
    normal = np.asarray(normal, dtype=float)
    bl, br, tr, tl = corners

    width = float(np.linalg.norm(br - bl)) * uv_scale
    height = float(np.linalg.norm(tl - bl)) * uv_scale
    uvs = ((0.0, 0.0), (width, 0.0), (width, height), (0.0, height))

    start = stream.vertex_count
    for corner, uv in zip(corners, uvs):
        stream.add_vertex(corner, normal, uv)

    if np.dot(np.cross(br - bl, tr - bl), normal) < 0.0:
        stream.indices.extend(
            [start, start + 2, start + 1, start, start + 3, start + 2]
        )
    else:
        stream.indices.extend(
            [start, start + 1, start + 2, start, start + 2, start + 3]
        )


def emit_triangle(
    stream: MeshStream,
    a: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    normal: np.ndarray,
) -> None:
    """Append a single triangle facing ``normal`` with fixed UVs."""
    corners = [np.asarray(p, dtype=float) for p in (a, b, c)]
    normal = np.asarray(normal, dtype=float)
    a, b, c = corners

    start = stream.vertex_count
    for corner, uv in zip(corners, _TRIANGLE_UVS):
        stream.add_vertex(corner, normal, uv)

    if np.dot(np.cross(b - a, c - a), normal) < 0.0:
        stream.indices.extend([start, start + 2, start + 1])
    else:
        stream.indices.extend([start, start + 1, start + 2])
