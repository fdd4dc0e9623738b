"""End-to-end tests for building mesh synthesis and assembly."""

from collections import Counter

import numpy as np
import pytest

from building_mesh.generators import (
    BuildingMeshGenerator,
    assemble_mesh,
    generate_building_mesh,
    generate_from_plan,
    generate_plan,
)
from building_mesh.generators.primitives import emit_quad
from building_mesh.models import (
    BuildingConfig,
    Direction,
    DoorLocation,
    DoorType,
    Material,
    MeshStreams,
    RoofType,
    vec3,
)
from building_mesh.validators import validate_mesh

SOUTH_DOOR = DoorLocation(x=0, y=0, direction=Direction.SOUTH)


def _block(size: int = 6, floors: int = 4, **config):
    fp = np.ones((size, size), dtype=bool)
    h = np.full((size, size), floors)
    return generate_building_mesh(fp, h, SOUTH_DOOR, BuildingConfig(**config))


def _open_edges(mesh) -> list:
    """Edges used by fewer than two triangles, ignoring the ground outline."""
    keys = [tuple(np.round(p, 5)) for p in mesh.positions]
    edges = Counter()
    for tri in mesh.triangles():
        for a, b in ((tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0])):
            ka, kb = keys[a], keys[b]
            if ka[1] == 0.0 and kb[1] == 0.0:
                continue
            edges[tuple(sorted((ka, kb)))] += 1
    return [e for e, n in edges.items() if n < 2]


class TestAssembler:
    def test_rebases_indices_per_stream(self):
        streams = MeshStreams()
        quad = (vec3(0, 0, 0), vec3(1, 0, 0), vec3(1, 1, 0), vec3(0, 1, 0))
        emit_quad(streams[Material.WALL], *quad, vec3(0, 0, 1))
        emit_quad(streams[Material.DOOR], *quad, vec3(0, 0, 1))
        mesh = assemble_mesh(streams)
        assert mesh.vertex_count == 8
        assert mesh.indices.tolist() == [0, 1, 2, 0, 2, 3, 4, 5, 6, 4, 6, 7]
        assert [s.material for s in mesh.submeshes] == list(Material)
        assert [(s.index_start, s.index_count) for s in mesh.submeshes] == [
            (0, 6), (6, 0), (6, 6), (12, 0),
        ]

    def test_empty_streams(self):
        mesh = assemble_mesh(MeshStreams())
        assert mesh.vertex_count == 0
        assert mesh.positions.shape == (0, 3)
        assert mesh.triangle_count == 0
        assert np.allclose(mesh.bounds.size, 0.0)


class TestFlatBlock:
    """6x6 block, 4 floors, flat roof, single door on the south side."""

    @pytest.fixture(scope="class")
    def mesh(self):
        return _block()

    def test_submesh_sizes(self, mesh):
        wall = mesh.submesh(Material.WALL)
        window = mesh.submesh(Material.WINDOW)
        door = mesh.submesh(Material.DOOR)
        roof = mesh.submesh(Material.ROOF)
        # 95 window panels, 1 door panel, 36 caps, 24 parapet fins
        assert wall.triangle_count == (95 * 8 + 10 + 36 + 24 * 2) * 2
        assert window.triangle_count == 95 * 2
        assert door.triangle_count == 2
        assert roof.triangle_count == 0

    def test_submeshes_partition_indices(self, mesh):
        stop = 0
        for sub in mesh.submeshes:
            assert sub.index_start == stop
            stop = sub.index_stop
        assert stop == len(mesh.indices)
        assert mesh.indices.max() < mesh.vertex_count

    def test_bounds(self, mesh):
        assert np.allclose(mesh.bounds.min, [0, 0, 0])
        assert np.allclose(mesh.bounds.max, [18, 12.6, 18])

    def test_one_cap_per_cell(self, mesh):
        tris = mesh.triangles(Material.WALL)
        flat_top = np.all(np.isclose(mesh.positions[tris][:, :, 1], 12.0), axis=1)
        facing_up = np.isclose(mesh.normals[tris[:, 0], 1], 1.0)
        assert (flat_top & facing_up).sum() == 36 * 2

    def test_no_interior_walls(self, mesh):
        pos = mesh.positions[mesh.triangles(Material.WALL).ravel()]
        inside = (
            (pos[:, 0] > 0.5) & (pos[:, 0] < 17.5)
            & (pos[:, 2] > 0.5) & (pos[:, 2] < 17.5)
        )
        assert (pos[inside, 1] >= 12.0 - 1e-9).all()

    def test_mesh_is_valid(self, mesh):
        assert validate_mesh(mesh) == []

    def test_summary(self, mesh):
        summary = mesh.summary()
        assert summary["vertices"] == mesh.vertex_count
        assert summary["triangles"] == mesh.triangle_count
        assert list(summary["submeshes"]) == ["wall", "window", "door", "roof"]
        assert summary["bounds"]["max"] == [18.0, 12.6, 18.0]


class TestDoubleDoor:
    def test_one_extra_wall_quad(self):
        single = _block()
        double = _block(door_type=DoorType.DOUBLE_DOOR)
        diff = (
            double.submesh(Material.WALL).triangle_count
            - single.submesh(Material.WALL).triangle_count
        )
        assert diff == 2
        assert double.submesh(Material.DOOR).triangle_count == 2


class TestGableBlock:
    def test_roof_replaces_caps_and_parapets(self):
        flat = _block()
        gable = _block(roof_type=RoofType.GABLE)
        wall_diff = (
            flat.submesh(Material.WALL).triangle_count
            - gable.submesh(Material.WALL).triangle_count
        )
        assert wall_diff == (36 + 24 * 2) * 2
        # one rectangle, square: two slopes plus two gable ends
        assert gable.submesh(Material.ROOF).triangle_count == 6

    def test_ridge_height(self):
        mesh = _block(roof_type=RoofType.GABLE)
        assert mesh.bounds.max[1] == pytest.approx(12.0 + 9.0 * 0.5)

    def test_mesh_is_valid(self):
        assert validate_mesh(_block(roof_type=RoofType.GABLE)) == []


class TestClosedSurface:
    def test_flat_roof_edges_shared(self):
        fp = np.ones((2, 1), dtype=bool)
        h = np.ones((2, 1), dtype=int)
        mesh = generate_building_mesh(fp, h, SOUTH_DOOR)
        assert _open_edges(mesh) == []

    def test_stepped_block_edges_shared(self):
        fp = np.ones((3, 2), dtype=bool)
        h = np.array([[1, 1], [2, 2], [1, 2]])
        mesh = generate_building_mesh(fp, h, SOUTH_DOOR)
        assert _open_edges(mesh) == []


class TestGenerator:
    def test_reuse_gives_identical_meshes(self):
        gen = BuildingMeshGenerator(BuildingConfig(roof_type=RoofType.GABLE))
        fp = np.ones((3, 3), dtype=bool)
        h = np.full((3, 3), 3)
        first = gen.generate(fp, h, SOUTH_DOOR)
        second = gen.generate(fp, h, SOUTH_DOOR)
        assert first.vertex_count == second.vertex_count
        assert np.array_equal(first.indices, second.indices)
        assert np.array_equal(first.positions, second.positions)

    def test_accepts_nested_lists(self):
        mesh = generate_building_mesh([[True]], [[1]], SOUTH_DOOR)
        assert mesh.submesh(Material.DOOR).triangle_count == 2

    def test_last_gables(self):
        fp = np.ones((3, 3), dtype=bool)
        h = np.full((3, 3), 3)
        gable = BuildingMeshGenerator(BuildingConfig(roof_type=RoofType.GABLE))
        gable.generate(fp, h, SOUTH_DOOR)
        assert len(gable.last_gables) == 1
        assert gable.last_gables[0].ridge_height == pytest.approx(9.0 + 4.5 * 0.5)

        flat = BuildingMeshGenerator()
        flat.generate(fp, h, SOUTH_DOOR)
        assert flat.last_gables == []

    def test_door_taller_than_floor_still_builds(self):
        mesh = generate_building_mesh(
            np.ones((2, 2), dtype=bool),
            np.full((2, 2), 2),
            SOUTH_DOOR,
            BuildingConfig(floor_height=2.0),
        )
        assert mesh.triangle_count > 0
        assert mesh.submesh(Material.DOOR).triangle_count == 2
        assert mesh.bounds.max[1] == pytest.approx(4.6)

    def test_double_door_filling_cell_still_builds(self):
        mesh = generate_building_mesh(
            [[True]], [[1]], SOUTH_DOOR,
            BuildingConfig(cell_size=2.0, door_type=DoorType.DOUBLE_DOOR),
        )
        assert mesh.submesh(Material.DOOR).triangle_count == 2
        assert mesh.submesh(Material.WINDOW).triangle_count == 3 * 2

    def test_default_config(self):
        assert BuildingMeshGenerator().config == BuildingConfig()

    @pytest.mark.parametrize("seed", range(12))
    def test_generated_plans_give_valid_meshes(self, seed):
        plan = generate_plan(seed)
        mesh = generate_from_plan(plan)
        assert validate_mesh(mesh) == []
        assert mesh.submesh(Material.DOOR).triangle_count == 2
        has_roof = mesh.submesh(Material.ROOF).triangle_count > 0
        assert has_roof == (plan.config.roof_type == RoofType.GABLE)
