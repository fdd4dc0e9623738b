"""Validation for plans and generated meshes.

- plan: opening fit, footprint occupancy, floor counts, door on an exterior face
- mesh: index ranges, submesh partition, degenerate and flipped triangles

Validators report ValidationError records; they never raise.
"""

from building_mesh.validators.mesh import validate_mesh
from building_mesh.validators.plan import ValidationError, validate_config, validate_plan

__all__ = ["ValidationError", "validate_config", "validate_mesh", "validate_plan"]
