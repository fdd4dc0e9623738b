"""Exterior wall panels with window and door openings.

For every occupied cell and each of its four sides, a wall is raised from
the neighbor's top (0 outside the footprint) up to the cell's own top,
wherever the neighbor is strictly lower. The wall is cut into floor-tall
segments. Each segment becomes a framed, recessed window, except the
ground segment of the door face, which becomes the entrance door.

Walls and frames go to the wall stream, glazing to the window stream and
the door leaf to the door stream.
"""

from __future__ import annotations

import logging

import numpy as np

from building_mesh.generators.primitives import emit_quad, face_normal
from building_mesh.models.config import BuildingConfig, DoorType
from building_mesh.models.geometry import Direction, cell_edge, floor_segments, normalized
from building_mesh.models.mesh import Material, MeshStreams
from building_mesh.models.plan import DoorLocation

logger = logging.getLogger(__name__)


def neighbor_top(
    footprint: np.ndarray,
    heights: np.ndarray,
    x: int,
    y: int,
    direction: Direction,
    floor_height: float,
) -> float | None:
    """World top height of the neighbor on one side, or None if there is none."""
    dx, dy = direction.offset
    nx, ny = x + dx, y + dy
    width, depth = footprint.shape
    if not (0 <= nx < width and 0 <= ny < depth) or not footprint[nx, ny]:
        return None
    return float(heights[nx, ny]) * floor_height


def build_walls(
    streams: MeshStreams,
    footprint: np.ndarray,
    heights: np.ndarray,
    door: DoorLocation | None,
    config: BuildingConfig,
) -> int:
    """Emit all exterior wall segments of the building.

    Args:
        streams: Streams to fill.
        footprint: Occupancy grid, shape (width, depth).
        heights: Floor counts aligned with the footprint.
        door: Entrance location. Assumed to be an exterior face; not checked.
        config: Synthesis options.

    Returns:
        Number of floor segments emitted.
    """
    width, depth = footprint.shape
    segments = 0

    for x in range(width):
        for y in range(depth):
            if not footprint[x, y]:
                continue
            top = float(heights[x, y]) * config.floor_height

            for direction in Direction:
                other = neighbor_top(footprint, heights, x, y, direction, config.floor_height)
                if other is not None and other >= top - config.height_epsilon:
                    continue
                bottom = other or 0.0
                is_door = door is not None and door.matches(x, y, direction)
                segments += _build_wall_face(
                    streams, x, y, direction, bottom, top, is_door, config
                )

    logger.debug("Built %d wall segments", segments)
    return segments


def _build_wall_face(
    streams: MeshStreams,
    x: int,
    y: int,
    direction: Direction,
    bottom: float,
    top: float,
    is_door: bool,
    config: BuildingConfig,
) -> int:
    """One side of one cell, from bottom to top, split per floor."""
    normal = direction.normal
    count = floor_segments(top - bottom, config.floor_height, config.height_epsilon)

    for i in range(count):
        y0 = bottom + i * config.floor_height
        y1 = min(bottom + (i + 1) * config.floor_height, top)
        bl, br = cell_edge(x, y, direction, config.cell_size, y0)
        tl, tr = cell_edge(x, y, direction, config.cell_size, y1)

        if is_door and i == 0:
            build_door_panel(streams, bl, br, tr, tl, normal, config)
        else:
            build_window_panel(streams, bl, br, tr, tl, normal, config)

    return count


def build_window_panel(
    streams: MeshStreams,
    bl: np.ndarray,
    br: np.ndarray,
    tr: np.ndarray,
    tl: np.ndarray,
    normal: np.ndarray,
    config: BuildingConfig,
) -> None:
    """Wall segment with a framed window recessed into it."""
    margin_h, margin_v = config.window_margins
    depth = config.window_recess_depth
    uv = config.uv_scale
    right = normalized(br - bl)
    up = normalized(tl - bl)

    frame = [
        bl + right * margin_h + up * margin_v,
        br - right * margin_h + up * margin_v,
        tr - right * margin_h - up * margin_v,
        tl + right * margin_h - up * margin_v,
    ]
    inset = [corner - normal * depth for corner in frame]
    frame_bl, frame_br, frame_tr, frame_tl = frame

    wall = streams[Material.WALL]
    emit_quad(wall, bl, frame_bl, frame_tl, tl, normal, uv)
    emit_quad(wall, frame_br, br, tr, frame_tr, normal, uv)
    emit_quad(wall, frame_tl, frame_tr, tr, tl, normal, uv)
    emit_quad(wall, bl, br, frame_br, frame_bl, normal, uv)

    emit_quad(streams[Material.WINDOW], *inset, normal, uv)

    _emit_recess(streams, frame, inset, uv)


def build_door_panel(
    streams: MeshStreams,
    bl: np.ndarray,
    br: np.ndarray,
    tr: np.ndarray,
    tl: np.ndarray,
    normal: np.ndarray,
    config: BuildingConfig,
) -> None:
    """Ground-floor wall segment with the entrance door centered in it."""
    uv = config.uv_scale
    right = normalized(br - bl)
    up = normalized(tl - bl)
    door_width = config.door_width
    door_height = config.door_height
    frame = config.door_frame_thickness
    offset = (config.cell_size - door_width) * 0.5

    door_bl = bl + right * offset
    door_br = bl + right * (offset + door_width)
    door_tr = door_br + up * door_height
    door_tl = door_bl + up * door_height

    frame_corners = [
        door_bl + right * frame,
        door_br - right * frame,
        door_tr - right * frame - up * frame,
        door_tl + right * frame - up * frame,
    ]
    recess = [corner - normal * config.door_recess_depth for corner in frame_corners]
    frame_bl, frame_br, frame_tr, frame_tl = frame_corners

    wall = streams[Material.WALL]
    # wall around the opening
    emit_quad(wall, bl, door_bl, door_tl, tl, normal, uv)
    emit_quad(wall, door_br, br, tr, door_tr, normal, uv)
    emit_quad(wall, door_tl, door_tr, tr, tl, normal, uv)

    # frame
    emit_quad(wall, door_bl, frame_bl, frame_tl, door_tl, normal, uv)
    emit_quad(wall, frame_br, door_br, door_tr, frame_tr, normal, uv)
    emit_quad(wall, frame_tl, frame_tr, door_tr, door_tl, normal, uv)

    emit_quad(streams[Material.DOOR], *recess, normal, uv)

    _emit_recess(streams, frame_corners, recess, uv)

    if config.door_type == DoorType.DOUBLE_DOOR:
        center = offset + door_width * 0.5
        half = config.door_divider_width * 0.5
        div_bl = bl + right * (center - half)
        div_br = bl + right * (center + half)
        emit_quad(
            wall, div_bl, div_br, div_br + up * door_height, div_bl + up * door_height,
            normal, uv,
        )


def _emit_recess(
    streams: MeshStreams,
    outer: list[np.ndarray],
    inner: list[np.ndarray],
    uv_scale: float,
) -> None:
    """Four side walls joining an opening outline to its recessed copy."""
    wall = streams[Material.WALL]
    for i in range(4):
        a, b = outer[i], outer[(i + 1) % 4]
        side = face_normal(a, b, inner[i])
        emit_quad(wall, a, b, inner[(i + 1) % 4], inner[i], side, uv_scale)
