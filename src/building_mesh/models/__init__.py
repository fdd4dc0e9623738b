"""Building mesh data models."""

from building_mesh.models.geometry import UP, Direction, cell_edge, normalized, vec3
from building_mesh.models.config import (
    DOOR_WIDTHS,
    WINDOW_MARGINS,
    BuildingConfig,
    DoorType,
    RoofType,
    WindowType,
)
from building_mesh.models.mesh import Bounds, Material, Mesh, MeshStream, MeshStreams, Submesh
from building_mesh.models.plan import BuildingPlan, DoorLocation

__all__ = [
    "UP",
    "Direction",
    "cell_edge",
    "normalized",
    "vec3",
    "DOOR_WIDTHS",
    "WINDOW_MARGINS",
    "BuildingConfig",
    "DoorType",
    "RoofType",
    "WindowType",
    "Bounds",
    "Material",
    "Mesh",
    "MeshStream",
    "MeshStreams",
    "Submesh",
    "BuildingPlan",
    "DoorLocation",
]
