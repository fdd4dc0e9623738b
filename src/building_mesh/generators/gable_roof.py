"""Gable roofs over connected footprint regions.

Pipeline, one pass, nothing revisited:

1. Flood-fill the footprint into 4-connected regions.
2. Carve each region into same-height rectangles, tallest first, growing
   each rectangle greedily right and then down in scan order.
3. Give each rectangle a gable roof with its ridge along the longer side.
   A ridge end that faces a same-height cell of the region is "connected":
   it reaches into the neighbor by the configured overlap and gets a hipped
   cap instead of a vertical gable triangle, so adjoining roofs read as one.

The greedy carving is deterministic but not unique. Ridge connections depend
on exactly which rectangles it picks, so the scan order must stay as is.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from building_mesh.generators.primitives import emit_quad, emit_triangle
from building_mesh.models.config import BuildingConfig
from building_mesh.models.geometry import UP, vec3
from building_mesh.models.mesh import Material, MeshStreams

logger = logging.getLogger(__name__)


@dataclass
class Region:
    """A maximal 4-connected set of occupied cells and its bounding box."""

    cells: list[tuple[int, int]] = field(default_factory=list)
    min_x: int = 0
    max_x: int = 0
    min_y: int = 0
    max_y: int = 0

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def depth(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True)
class RoofRect:
    """Inclusive cell rectangle whose cells all have the same floor count."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int
    floors: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def depth(self) -> int:
        return self.max_y - self.min_y + 1


@dataclass(frozen=True)
class RidgeEnd:
    """One end of a ridge.

    ``position`` is the coordinate along the ridge axis where the ridge
    stops, including overhang and, when connected, the overlap extension.
    """

    has_connection: bool
    position: float
    height: float
    neighbor: tuple[int, int] | None = None


@dataclass(frozen=True)
class GablePlan:
    """Resolved geometry parameters of one rectangle's roof."""

    rect: RoofRect
    axis: str  # "x" or "z": world axis the ridge runs along
    base_height: float
    ridge_height: float
    eave_start: float  # along the ridge axis, overhang included
    eave_end: float
    across_min: float  # across the ridge axis, overhang included
    across_max: float
    center: float  # ridge line, across the ridge axis
    start: RidgeEnd
    end: RidgeEnd


# ── Region discovery ──────────────────────────────────────────────────


def find_regions(footprint: np.ndarray) -> list[Region]:
    """Breadth-first flood fill over occupied cells, scanning x then y."""
    width, depth = footprint.shape
    processed = np.zeros_like(footprint, dtype=bool)
    regions: list[Region] = []

    for x in range(width):
        for y in range(depth):
            if not footprint[x, y] or processed[x, y]:
                continue

            region = Region(cells=[(x, y)], min_x=x, max_x=x, min_y=y, max_y=y)
            processed[x, y] = True
            queue = deque([(x, y)])
            while queue:
                cx, cy = queue.popleft()
                for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
                    if not (0 <= nx < width and 0 <= ny < depth):
                        continue
                    if not footprint[nx, ny] or processed[nx, ny]:
                        continue
                    processed[nx, ny] = True
                    queue.append((nx, ny))
                    region.cells.append((nx, ny))
                    region.min_x = min(region.min_x, nx)
                    region.max_x = max(region.max_x, nx)
                    region.min_y = min(region.min_y, ny)
                    region.max_y = max(region.max_y, ny)
            regions.append(region)

    return regions


# ── Height decomposition ──────────────────────────────────────────────


def decompose_region(region: Region, heights: np.ndarray) -> list[RoofRect]:
    """Carve a region into same-height rectangles, tallest heights first.

    For each unused cell at the current height (scanning local x, then local
    y) the rectangle grows right while cells are unused and equal, then down
    while the entire current row matches.
    """
    w, d = region.width, region.depth
    local = np.full((w, d), -1, dtype=int)
    used = np.ones((w, d), dtype=bool)
    for cx, cy in region.cells:
        local[cx - region.min_x, cy - region.min_y] = heights[cx, cy]
        used[cx - region.min_x, cy - region.min_y] = False

    rects: list[RoofRect] = []
    for value in range(int(local.max()), -1, -1):
        for lx in range(w):
            for ly in range(d):
                if used[lx, ly] or local[lx, ly] != value:
                    continue

                rx = lx
                while rx + 1 < w and not used[rx + 1, ly] and local[rx + 1, ly] == value:
                    rx += 1

                ry = ly
                while ry + 1 < d and all(
                    not used[xx, ry + 1] and local[xx, ry + 1] == value
                    for xx in range(lx, rx + 1)
                ):
                    ry += 1

                used[lx:rx + 1, ly:ry + 1] = True
                rects.append(
                    RoofRect(
                        min_x=region.min_x + lx,
                        max_x=region.min_x + rx,
                        min_y=region.min_y + ly,
                        max_y=region.min_y + ry,
                        floors=value,
                    )
                )

    return rects


# ── Per-rectangle roof ────────────────────────────────────────────────


def plan_gable(
    rect: RoofRect,
    footprint: np.ndarray,
    heights: np.ndarray,
    config: BuildingConfig,
) -> GablePlan:
    """Resolve ridge orientation, heights and end connections for a rectangle."""
    cs = config.cell_size
    pitch = config.roof_pitch
    overhang = config.roof_overhang
    width, depth = footprint.shape

    base = rect.floors * config.floor_height
    floors = int(round(base / config.floor_height))
    region_width = rect.width * cs
    region_depth = rect.depth * cs

    if region_width > region_depth:
        axis = "x"
        short = region_depth
        along_min, along_max = rect.min_x, rect.max_x
        across_min, across_max = rect.min_y, rect.max_y
        start_cells = [(rect.min_x - 1, yy) for yy in range(rect.min_y, rect.max_y + 1)]
        end_cells = [(rect.max_x + 1, yy) for yy in range(rect.min_y, rect.max_y + 1)]
    else:
        axis = "z"
        short = region_width
        along_min, along_max = rect.min_y, rect.max_y
        across_min, across_max = rect.min_x, rect.max_x
        start_cells = [(xx, rect.min_y - 1) for xx in range(rect.min_x, rect.max_x + 1)]
        end_cells = [(xx, rect.max_y + 1) for xx in range(rect.min_x, rect.max_x + 1)]

    ridge = base + short * 0.5 * pitch
    center = (across_min + across_max + 1) * 0.5 * cs
    overlap = config.roof_connection_overlap * cs

    def resolve_end(cells: list[tuple[int, int]], position: float, outward: float) -> RidgeEnd:
        neighbor = _find_connection(cells, footprint, heights, floors)
        if neighbor is None:
            return RidgeEnd(has_connection=False, position=position, height=ridge)
        across_index = neighbor[1] if axis == "x" else neighbor[0]
        neighbor_center = (across_index + 0.5) * cs
        connection = base + (short * 0.5 - abs(center - neighbor_center)) * pitch
        height = max(base, min(connection, ridge) - overlap * pitch)
        return RidgeEnd(
            has_connection=True,
            position=position + outward * overlap,
            height=height,
            neighbor=neighbor,
        )

    eave_start = along_min * cs - overhang
    eave_end = (along_max + 1) * cs + overhang
    return GablePlan(
        rect=rect,
        axis=axis,
        base_height=base,
        ridge_height=ridge,
        eave_start=eave_start,
        eave_end=eave_end,
        across_min=across_min * cs - overhang,
        across_max=(across_max + 1) * cs + overhang,
        center=center,
        start=resolve_end(start_cells, eave_start, -1.0),
        end=resolve_end(end_cells, eave_end, 1.0),
    )


def _find_connection(
    cells: list[tuple[int, int]],
    footprint: np.ndarray,
    heights: np.ndarray,
    floors: int,
) -> tuple[int, int] | None:
    """First cell in scan order that is occupied and has exactly ``floors``."""
    width, depth = footprint.shape
    for nx, ny in cells:
        if not (0 <= nx < width and 0 <= ny < depth):
            return None
        if footprint[nx, ny] and heights[nx, ny] == floors:
            return (nx, ny)
    return None


def emit_gable(streams: MeshStreams, plan: GablePlan, config: BuildingConfig) -> None:
    """Emit slopes plus gable triangles or hipped caps for one roof."""
    roof = streams[Material.ROOF]
    uv = config.uv_scale
    axis = plan.axis

    def point(along: float, across: float, height: float) -> np.ndarray:
        if axis == "x":
            return vec3(along, height, across)
        return vec3(across, height, along)

    base = plan.base_height
    eave_front = point(plan.eave_start, plan.across_min, base)
    eave_back = point(plan.eave_start, plan.across_max, base)
    eave_front_end = point(plan.eave_end, plan.across_min, base)
    eave_back_end = point(plan.eave_end, plan.across_max, base)
    ridge_start_base = point(plan.eave_start, plan.center, plan.ridge_height)
    ridge_end_base = point(plan.eave_end, plan.center, plan.ridge_height)
    ridge_start = point(plan.start.position, plan.center, plan.start.height)
    ridge_end = point(plan.end.position, plan.center, plan.end.height)

    emit_quad(roof, eave_front, ridge_start_base, ridge_end_base, eave_front_end, UP, uv)
    emit_quad(roof, eave_back_end, ridge_end_base, ridge_start_base, eave_back, UP, uv)

    along = vec3(1.0, 0.0, 0.0) if axis == "x" else vec3(0.0, 0.0, 1.0)

    if plan.start.has_connection:
        emit_triangle(roof, eave_front, ridge_start_base, ridge_start, UP)
        emit_triangle(roof, ridge_start, ridge_start_base, eave_back, UP)
    else:
        emit_triangle(roof, eave_front, ridge_start_base, eave_back, -along)

    if plan.end.has_connection:
        emit_triangle(roof, ridge_end, ridge_end_base, eave_front_end, UP)
        emit_triangle(roof, eave_back_end, ridge_end_base, ridge_end, UP)
    else:
        emit_triangle(roof, eave_back_end, ridge_end_base, eave_front_end, along)


def build_gable_roof(
    streams: MeshStreams,
    footprint: np.ndarray,
    heights: np.ndarray,
    config: BuildingConfig,
) -> list[GablePlan]:
    """Run the full gable pipeline and return the plan of every roof emitted."""
    plans: list[GablePlan] = []
    regions = find_regions(footprint)
    for region in regions:
        rects = decompose_region(region, heights)
        logger.debug(
            "Region at (%d, %d) with %d cells -> %d roof rectangles",
            region.min_x, region.min_y, len(region.cells), len(rects),
        )
        for rect in rects:
            plan = plan_gable(rect, footprint, heights, config)
            emit_gable(streams, plan, config)
            plans.append(plan)

    logger.debug("Built %d gable roofs over %d regions", len(plans), len(regions))
    return plans
