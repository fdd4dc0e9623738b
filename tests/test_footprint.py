"""Tests for random plan generation."""

import numpy as np
import pytest

from building_mesh.generators.footprint import (
    MAX_FLOORS,
    MIN_FLOORS,
    FootprintShape,
    exterior_faces,
    find_door_location,
    generate_height_grid,
    generate_plan,
    make_footprint,
    random_config,
)
from building_mesh.generators.gable_roof import find_regions
from building_mesh.models import Direction, DoorType, RoofType, WindowType


class TestShapes:
    @pytest.mark.parametrize(
        "shape,cells",
        [
            (FootprintShape.RECTANGLE, 36),
            (FootprintShape.WIDE_RECTANGLE, 32),
            (FootprintShape.L_SHAPE, 20),
            (FootprintShape.U_SHAPE, 16),
            (FootprintShape.T_SHAPE, 20),
            (FootprintShape.C_SHAPE, 16),
            (FootprintShape.PLUS, 12),
            (FootprintShape.SMALL_L, 14),
        ],
    )
    def test_cell_counts(self, shape, cells):
        assert make_footprint(shape).sum() == cells

    @pytest.mark.parametrize("shape", list(FootprintShape))
    def test_single_region(self, shape):
        assert len(find_regions(make_footprint(shape))) == 1

    def test_rectangle_centered_on_larger_grid(self):
        g = make_footprint(FootprintShape.RECTANGLE, grid_size=12)
        xs, ys = np.nonzero(g)
        assert (xs.min(), xs.max()) == (3, 8)
        assert (ys.min(), ys.max()) == (3, 8)

    def test_small_grid_rejected(self):
        with pytest.raises(ValueError, match="at least 10"):
            make_footprint(FootprintShape.RECTANGLE, grid_size=9)


class TestHeights:
    def test_range(self):
        fp = make_footprint(FootprintShape.T_SHAPE)
        for seed in range(10):
            h = generate_height_grid(fp, np.random.default_rng(seed))
            assert h[fp].min() >= MIN_FLOORS
            assert h[fp].max() <= MAX_FLOORS
            assert (h[~fp] == 0).all()

    def test_deterministic(self):
        fp = make_footprint(FootprintShape.PLUS)
        a = generate_height_grid(fp, np.random.default_rng(3))
        b = generate_height_grid(fp, np.random.default_rng(3))
        assert np.array_equal(a, b)


class TestDoor:
    def test_exterior_faces_single_cell(self):
        faces = exterior_faces(np.array([[True]]))
        assert faces == [(0, 0, d) for d in Direction]

    def test_exterior_faces_skip_shared_sides(self):
        faces = exterior_faces(np.array([[True], [True]]))
        assert (0, 0, Direction.EAST) not in faces
        assert (1, 0, Direction.WEST) not in faces
        assert len(faces) == 6

    def test_door_on_exterior_face(self):
        fp = make_footprint(FootprintShape.U_SHAPE)
        faces = exterior_faces(fp)
        for seed in range(20):
            door = find_door_location(fp, np.random.default_rng(seed))
            assert (door.x, door.y, door.direction) in faces

    def test_empty_footprint_fallback(self):
        door = find_door_location(np.zeros((10, 10), dtype=bool), np.random.default_rng(0))
        assert (door.x, door.y, door.direction) == (0, 0, Direction.NORTH)


class TestConfig:
    def test_overrides_win(self):
        rng = np.random.default_rng(0)
        config = random_config(
            rng,
            roof_type=RoofType.GABLE,
            window_type=WindowType.TALL_WINDOWS,
            door_type=DoorType.DOUBLE_DOOR,
        )
        assert config.roof_type == RoofType.GABLE
        assert config.window_type == WindowType.TALL_WINDOWS
        assert config.door_type == DoorType.DOUBLE_DOOR

    def test_none_override_ignored(self):
        a = random_config(np.random.default_rng(5), roof_type=None)
        b = random_config(np.random.default_rng(5))
        assert a == b


class TestGeneratePlan:
    def test_same_seed_same_plan(self):
        assert generate_plan(42) == generate_plan(42)

    def test_seeds_vary(self):
        plans = {generate_plan(seed).model_dump_json() for seed in range(10)}
        assert len(plans) > 1

    def test_fixed_shape(self):
        plan = generate_plan(3, shape=FootprintShape.PLUS)
        assert len(plan.occupied_cells()) == 12
        assert plan.seed == 3

    def test_grid_size(self):
        plan = generate_plan(1, grid_size=14)
        assert (plan.width, plan.depth) == (14, 14)

    def test_config_override(self):
        assert generate_plan(1, roof_type=RoofType.FLAT).config.roof_type == RoofType.FLAT
        assert generate_plan(1, roof_type=RoofType.GABLE).config.roof_type == RoofType.GABLE

    def test_door_cell_occupied(self):
        for seed in range(10):
            plan = generate_plan(seed)
            assert plan.footprint[plan.door.x][plan.door.y]
