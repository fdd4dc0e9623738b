"""Building mesh synthesis entry point.

footprint + heights + door -> walls and openings -> flat or gable roof ->
assembled mesh with wall, window, door and roof submeshes.
"""

from __future__ import annotations

import logging

import numpy as np

from building_mesh.generators.assembler import assemble_mesh
from building_mesh.generators.flat_roof import build_flat_roof
from building_mesh.generators.gable_roof import GablePlan, build_gable_roof
from building_mesh.generators.walls import build_walls
from building_mesh.models.config import BuildingConfig, RoofType
from building_mesh.models.mesh import Mesh, MeshStreams
from building_mesh.models.plan import BuildingPlan, DoorLocation

logger = logging.getLogger(__name__)


class BuildingMeshGenerator:
    """Synthesizes building meshes for one configuration.

    Build buffers are created per call, so an instance can be reused for
    any number of buildings. Use one instance per thread. ``last_gables``
    holds the roof plans of the most recent gable-roof call.
    """

    def __init__(self, config: BuildingConfig | None = None):
        self.config = config or BuildingConfig()
        self.last_gables: list[GablePlan] = []

    def generate(
        self,
        footprint: np.ndarray | list[list[bool]],
        heights: np.ndarray | list[list[int]],
        door: DoorLocation | None,
    ) -> Mesh:
        """Build the mesh for one building.

        Inputs are not validated: an invalid door or an empty footprint yields
        best-effort geometry rather than an error.

        Args:
            footprint: Occupancy grid indexed [x][y].
            heights: Floor counts aligned with the footprint.
            door: Entrance cell and side, expected on an exterior face.

        Returns:
            The assembled mesh.
        """
        footprint = np.asarray(footprint, dtype=bool)
        heights = np.asarray(heights, dtype=int)
        streams = MeshStreams()

        build_walls(streams, footprint, heights, door, self.config)

        if self.config.roof_type == RoofType.GABLE:
            self.last_gables = build_gable_roof(streams, footprint, heights, self.config)
        else:
            self.last_gables = []
            build_flat_roof(streams, footprint, heights, self.config)

        mesh = assemble_mesh(streams)
        logger.debug(
            "Generated %s-roof mesh: %d vertices, %d triangles",
            self.config.roof_type.value, mesh.vertex_count, mesh.triangle_count,
        )
        return mesh


def generate_building_mesh(
    footprint: np.ndarray | list[list[bool]],
    heights: np.ndarray | list[list[int]],
    door: DoorLocation | None,
    config: BuildingConfig | None = None,
) -> Mesh:
    """Convenience wrapper around BuildingMeshGenerator.generate."""
    return BuildingMeshGenerator(config).generate(footprint, heights, door)


def generate_from_plan(plan: BuildingPlan) -> Mesh:
    """Build the mesh described by a plan, using the plan's own config."""
    return BuildingMeshGenerator(plan.config).generate(
        plan.footprint_array(), plan.heights_array(), plan.door
    )
