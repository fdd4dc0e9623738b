"""Tests for quad and triangle emission."""

import math

import numpy as np

from building_mesh.generators.primitives import emit_quad, emit_triangle, face_normal
from building_mesh.models.geometry import vec3
from building_mesh.models.mesh import MeshStream

BL = vec3(0, 0, 0)
BR = vec3(1, 0, 0)
TR = vec3(1, 1, 0)
TL = vec3(0, 1, 0)


def _facing(stream: MeshStream) -> list[float]:
    """Dot of each triangle's geometric normal with its vertex normal."""
    result = []
    for k in range(0, len(stream.indices), 3):
        a, b, c = (stream.positions[i] for i in stream.indices[k:k + 3])
        n = stream.normals[stream.indices[k]]
        result.append(float(np.dot(np.cross(b - a, c - a), n)))
    return result


class TestEmitQuad:
    def test_four_vertices_two_triangles(self):
        s = MeshStream()
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, 1))
        assert s.vertex_count == 4
        assert s.triangle_count == 2
        assert len(s.indices) == 6

    def test_no_flip_when_order_matches_normal(self):
        s = MeshStream()
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, 1))
        assert s.indices == [0, 1, 2, 0, 2, 3]

    def test_flip_when_order_opposes_normal(self):
        s = MeshStream()
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, -1))
        assert s.indices == [0, 2, 1, 0, 3, 2]

    def test_winding_always_matches_normal(self):
        s = MeshStream()
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, 1))
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, -1))
        emit_quad(s, TL, TR, BR, BL, vec3(0, 0, 1))
        assert all(d > 0 for d in _facing(s))

    def test_normal_replicated(self):
        s = MeshStream()
        n = vec3(0, 0, -1)
        emit_quad(s, BL, BR, TR, TL, n)
        for stored in s.normals:
            assert np.allclose(stored, n)

    def test_planar_uvs(self):
        s = MeshStream()
        emit_quad(
            s, vec3(0, 0, 0), vec3(2, 0, 0), vec3(2, 4, 0), vec3(0, 4, 0),
            vec3(0, 0, 1), uv_scale=0.5,
        )
        assert s.uvs == [(0.0, 0.0), (1.0, 0.0), (1.0, 2.0), (0.0, 2.0)]

    def test_indices_offset_by_existing_vertices(self):
        s = MeshStream()
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, 1))
        emit_quad(s, BL, BR, TR, TL, vec3(0, 0, 1))
        assert s.indices[6:] == [4, 5, 6, 4, 6, 7]

    def test_positions_are_copies(self):
        s = MeshStream()
        corner = vec3(0, 0, 0)
        emit_quad(s, corner, BR, TR, TL, vec3(0, 0, 1))
        corner[0] = 99.0
        assert s.positions[0][0] == 0.0


class TestEmitTriangle:
    def test_fixed_uvs(self):
        s = MeshStream()
        emit_triangle(s, BL, BR, TL, vec3(0, 0, 1))
        assert s.uvs == [(0.0, 0.0), (0.5, 1.0), (1.0, 0.0)]

    def test_no_flip(self):
        s = MeshStream()
        emit_triangle(s, BL, BR, TL, vec3(0, 0, 1))
        assert s.indices == [0, 1, 2]

    def test_flip(self):
        s = MeshStream()
        emit_triangle(s, BL, BR, TL, vec3(0, 0, -1))
        assert s.indices == [0, 2, 1]
        assert all(d > 0 for d in _facing(s))


class TestFaceNormal:
    def test_unit_length(self):
        n = face_normal(vec3(0, 0, 0), vec3(2, 0, 0), vec3(0, 3, 0))
        assert math.isclose(float(np.linalg.norm(n)), 1.0)
        assert np.allclose(n, vec3(0, 0, 1))
