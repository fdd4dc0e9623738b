"""Merge the per-material streams into one indexed mesh."""

from __future__ import annotations

import numpy as np

from building_mesh.models.mesh import Bounds, Mesh, MeshStreams, Submesh


def assemble_mesh(streams: MeshStreams) -> Mesh:
    """Concatenate wall, window, door and roof streams, in that order.

    Each stream's indices are rebased by the number of vertices that precede
    it, and each stream becomes one contiguous submesh.
    """
    positions: list[np.ndarray] = []
    normals: list[np.ndarray] = []
    uvs: list[tuple[float, float]] = []
    indices: list[int] = []
    submeshes: list[Submesh] = []

    for material, stream in streams:
        vertex_offset = len(positions)
        index_start = len(indices)
        positions.extend(stream.positions)
        normals.extend(stream.normals)
        uvs.extend(stream.uvs)
        indices.extend(i + vertex_offset for i in stream.indices)
        submeshes.append(
            Submesh(material=material, index_start=index_start, index_count=len(stream.indices))
        )

    position_array = np.array(positions, dtype=float).reshape(-1, 3)
    return Mesh(
        positions=position_array,
        normals=np.array(normals, dtype=float).reshape(-1, 3),
        uvs=np.array(uvs, dtype=float).reshape(-1, 2),
        indices=np.array(indices, dtype=np.int64),
        submeshes=submeshes,
        bounds=Bounds.from_positions(position_array),
    )
