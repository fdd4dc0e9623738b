"""Random building plans: footprint shapes, height grids and door placement.

All randomness comes from an explicit ``numpy.random.Generator`` passed in
by the caller, so the same seed always yields the same plan.

Shapes are laid out on a 10x10 reference grid. On larger grids the
rectangles stay centered and the other shapes keep their 10x10 coordinates.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from building_mesh.models.config import BuildingConfig, DoorType, RoofType, WindowType
from building_mesh.models.geometry import Direction
from building_mesh.models.plan import BuildingPlan, DoorLocation

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 10
MIN_FLOORS = 3
MAX_FLOORS = 8


class FootprintShape(str, Enum):
    """Footprint templates."""

    RECTANGLE = "rectangle"
    WIDE_RECTANGLE = "wide_rectangle"
    L_SHAPE = "l_shape"
    U_SHAPE = "u_shape"
    T_SHAPE = "t_shape"
    C_SHAPE = "c_shape"
    PLUS = "plus"
    SMALL_L = "small_l"


def make_footprint(shape: FootprintShape, grid_size: int = 10) -> np.ndarray:
    """Occupancy grid for a template shape, indexed [x, y].

    Raises:
        ValueError: If the grid is smaller than the 10x10 reference grid.
    """
    if grid_size < MIN_GRID_SIZE:
        raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}, got {grid_size}")

    g = np.zeros((grid_size, grid_size), dtype=bool)

    if shape == FootprintShape.RECTANGLE:
        _fill_centered(g, 6, 6)
    elif shape == FootprintShape.WIDE_RECTANGLE:
        _fill_centered(g, 8, 4)
    elif shape == FootprintShape.L_SHAPE:
        g[2:4, 2:8] = True
        g[2:8, 6:8] = True
    elif shape == FootprintShape.U_SHAPE:
        g[2, 2:8] = True
        g[7, 2:8] = True
        g[2:8, 2] = True
    elif shape == FootprintShape.T_SHAPE:
        g[2:8, 2:4] = True
        g[4:6, 2:8] = True
    elif shape == FootprintShape.C_SHAPE:
        g[2, 2:8] = True
        g[2:8, 2] = True
        g[2:8, 7] = True
    elif shape == FootprintShape.PLUS:
        g[4:6, 3:7] = True
        g[3:7, 4:6] = True
    elif shape == FootprintShape.SMALL_L:
        g[5:7, 4:9] = True
        g[5:9, 7:9] = True

    return g


def _fill_centered(g: np.ndarray, w: int, h: int) -> None:
    size = g.shape[0]
    x0 = (size - w) // 2
    y0 = (size - h) // 2
    g[x0:x0 + w, y0:y0 + h] = True


def generate_height_grid(
    footprint: np.ndarray,
    rng: np.random.Generator,
    min_height: int = MIN_FLOORS,
    max_height: int = MAX_FLOORS,
) -> np.ndarray:
    """Floor counts: one base height plus 1-2 round areas raised or lowered.

    Every occupied cell ends up in [min_height, max_height]; empty cells are 0.
    """
    size_x, size_y = footprint.shape
    base = int(rng.integers(min_height, max_height + 1))
    heights = np.where(footprint, base, 0).astype(int)

    for _ in range(int(rng.integers(1, 3))):
        cx = int(rng.integers(2, size_x - 2))
        cy = int(rng.integers(2, size_y - 2))
        delta = int(rng.integers(-2, 4))
        radius = float(rng.uniform(2.0, 5.0))
        shifted = int(np.clip(base + delta, min_height, max_height))

        xs, ys = np.meshgrid(np.arange(size_x), np.arange(size_y), indexing="ij")
        inside = np.hypot(xs - cx, ys - cy) < radius
        heights[inside & footprint] = shifted

    return heights


def exterior_faces(footprint: np.ndarray) -> list[tuple[int, int, Direction]]:
    """Every (x, y, direction) whose neighbor is outside the grid or empty."""
    width, depth = footprint.shape
    faces = []
    for x in range(width):
        for y in range(depth):
            if not footprint[x, y]:
                continue
            for direction in Direction:
                dx, dy = direction.offset
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and 0 <= ny < depth) or not footprint[nx, ny]:
                    faces.append((x, y, direction))
    return faces


def find_door_location(footprint: np.ndarray, rng: np.random.Generator) -> DoorLocation:
    """Pick a random exterior face for the entrance door."""
    faces = exterior_faces(footprint)
    if not faces:
        logger.warning("Footprint has no exterior faces; placing door at (0, 0) north")
        return DoorLocation(x=0, y=0, direction=Direction.NORTH)
    x, y, direction = faces[int(rng.integers(len(faces)))]
    return DoorLocation(x=x, y=y, direction=direction)


def random_config(rng: np.random.Generator, **overrides) -> BuildingConfig:
    """Coin-flip window, door and roof variants. Overrides win over the flips."""
    choices = {
        "window_type": WindowType.BIG_WINDOWS if rng.random() > 0.5 else WindowType.TALL_WINDOWS,
        "door_type": DoorType.SINGLE_DOOR if rng.random() > 0.5 else DoorType.DOUBLE_DOOR,
        "roof_type": RoofType.GABLE if rng.random() > 0.5 else RoofType.FLAT,
    }
    choices.update({k: v for k, v in overrides.items() if v is not None})
    return BuildingConfig(**choices)


def generate_plan(
    seed: int,
    grid_size: int = 10,
    shape: FootprintShape | None = None,
    name: str = "Building",
    **config_overrides,
) -> BuildingPlan:
    """Generate a complete random plan from a seed.

    Args:
        seed: Seed for the plan's random generator.
        grid_size: Side length of the square grid (at least 10).
        shape: Footprint template; random when None.
        name: Plan name.
        **config_overrides: BuildingConfig fields that bypass the random choice.

    Returns:
        A plan whose door lies on an exterior face.
    """
    rng = np.random.default_rng(seed)
    if shape is None:
        shape = list(FootprintShape)[int(rng.integers(len(FootprintShape)))]

    footprint = make_footprint(shape, grid_size)
    heights = generate_height_grid(footprint, rng)
    door = find_door_location(footprint, rng)
    config = random_config(rng, **config_overrides)

    logger.debug("Seed %d -> %s footprint, %s roof", seed, shape.value, config.roof_type.value)
    return BuildingPlan(
        name=name,
        footprint=footprint.tolist(),
        heights=heights.tolist(),
        door=door,
        config=config,
        seed=seed,
    )
