"""Building generation tools.

- Primitives: quad/triangle emission with winding correction
- Walls: per-cell wall panels with window and door openings
- Flat roof: caps and parapets
- Gable roof: region flood fill, height decomposition, connected ridges
- Assembler: four material streams -> one indexed mesh
- Footprint: seeded random plans (shape, heights, door)
"""

from building_mesh.generators.assembler import assemble_mesh
from building_mesh.generators.building import (
    BuildingMeshGenerator,
    generate_building_mesh,
    generate_from_plan,
)
from building_mesh.generators.flat_roof import build_flat_roof
from building_mesh.generators.footprint import FootprintShape, generate_plan
from building_mesh.generators.gable_roof import build_gable_roof
from building_mesh.generators.primitives import emit_quad, emit_triangle
from building_mesh.generators.walls import build_walls

__all__ = [
    "assemble_mesh",
    "BuildingMeshGenerator",
    "generate_building_mesh",
    "generate_from_plan",
    "build_flat_roof",
    "FootprintShape",
    "generate_plan",
    "build_gable_roof",
    "emit_quad",
    "emit_triangle",
    "build_walls",
]
