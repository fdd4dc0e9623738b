"""Mesh data: per-material build streams and the assembled indexed mesh.

Streams are scratch buffers filled by the builders during one synthesis
call. The assembled Mesh is an immutable-by-convention value made of numpy
arrays plus four submesh index ranges in material order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

import numpy as np


class Material(str, Enum):
    """Material group of a triangle. Declaration order is the submesh order."""

    WALL = "wall"
    WINDOW = "window"
    DOOR = "door"
    ROOF = "roof"


@dataclass
class MeshStream:
    """Vertices and triangles for one material, with stream-local indices."""

    positions: list[np.ndarray] = field(default_factory=list)
    normals: list[np.ndarray] = field(default_factory=list)
    uvs: list[tuple[float, float]] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def add_vertex(
        self, position: np.ndarray, normal: np.ndarray, uv: tuple[float, float]
    ) -> int:
        """Append one vertex and return its stream-local index."""
        self.positions.append(np.array(position, dtype=float))
        self.normals.append(np.array(normal, dtype=float))
        self.uvs.append((float(uv[0]), float(uv[1])))
        return len(self.positions) - 1


class MeshStreams:
    """The four material streams of one synthesis call."""

    def __init__(self) -> None:
        self._streams: dict[Material, MeshStream] = {m: MeshStream() for m in Material}

    def __getitem__(self, material: Material) -> MeshStream:
        return self._streams[material]

    def __iter__(self) -> Iterator[tuple[Material, MeshStream]]:
        for material in Material:
            yield material, self._streams[material]


@dataclass(frozen=True)
class Submesh:
    """A contiguous range of the combined index array sharing one material."""

    material: Material
    index_start: int
    index_count: int

    @property
    def index_stop(self) -> int:
        return self.index_start + self.index_count

    @property
    def triangle_count(self) -> int:
        return self.index_count // 3


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    min: np.ndarray
    max: np.ndarray

    @classmethod
    def from_positions(cls, positions: np.ndarray) -> Bounds:
        if len(positions) == 0:
            return cls(min=np.zeros(3), max=np.zeros(3))
        return cls(min=positions.min(axis=0), max=positions.max(axis=0))

    @property
    def center(self) -> np.ndarray:
        return (self.min + self.max) / 2.0

    @property
    def size(self) -> np.ndarray:
        return self.max - self.min


@dataclass
class Mesh:
    """Indexed triangle mesh with one submesh per material."""

    positions: np.ndarray  # (N, 3)
    normals: np.ndarray  # (N, 3)
    uvs: np.ndarray  # (N, 2)
    indices: np.ndarray  # (M,), M divisible by 3
    submeshes: list[Submesh]
    bounds: Bounds

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def submesh(self, material: Material) -> Submesh:
        """Find the submesh for a material."""
        return next(s for s in self.submeshes if s.material == material)

    def submesh_indices(self, material: Material) -> np.ndarray:
        sub = self.submesh(material)
        return self.indices[sub.index_start:sub.index_stop]

    def triangles(self, material: Material | None = None) -> np.ndarray:
        """Triangle vertex indices as an (T, 3) array, optionally for one material."""
        indices = self.indices if material is None else self.submesh_indices(material)
        return indices.reshape(-1, 3)

    def summary(self) -> dict:
        """Plain-data statistics, suitable for JSON output."""
        return {
            "vertices": self.vertex_count,
            "triangles": self.triangle_count,
            "submeshes": {
                s.material.value: {
                    "index_start": s.index_start,
                    "triangles": s.triangle_count,
                }
                for s in self.submeshes
            },
            "bounds": {
                "min": [round(float(v), 4) for v in self.bounds.min],
                "max": [round(float(v), 4) for v in self.bounds.max],
            },
        }
