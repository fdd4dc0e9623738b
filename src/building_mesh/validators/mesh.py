"""Mesh validation: index ranges, submesh partition, degenerate and flipped triangles."""

from __future__ import annotations

import numpy as np

from building_mesh.models.mesh import Material, Mesh
from building_mesh.validators.plan import ValidationError

DEGENERATE_AREA = 1e-10


def validate_mesh(mesh: Mesh) -> list[ValidationError]:
    """Check that a mesh is well formed.

    - every index refers to an existing vertex
    - submeshes are in material order, contiguous and cover all indices
    - no triangle has (near) zero area
    - every triangle's winding agrees with its first vertex's normal
    """
    errors: list[ValidationError] = []
    errors.extend(_check_submeshes(mesh))

    if len(mesh.indices) % 3 != 0:
        errors.append(
            ValidationError(
                severity="error",
                element_type="Mesh",
                element_id="indices",
                message=f"Index count {len(mesh.indices)} is not a multiple of 3",
            )
        )
        return errors

    if len(mesh.indices) and (mesh.indices.min() < 0 or mesh.indices.max() >= mesh.vertex_count):
        errors.append(
            ValidationError(
                severity="error",
                element_type="Mesh",
                element_id="indices",
                message=f"Indices out of range for {mesh.vertex_count} vertices",
            )
        )
        return errors

    for sub in mesh.submeshes:
        if sub.index_count == 0 or sub.index_count % 3 != 0:
            continue
        tris = mesh.triangles(sub.material)
        v0, v1, v2 = (mesh.positions[tris[:, k]] for k in range(3))
        cross = np.cross(v1 - v0, v2 - v0)
        area = np.linalg.norm(cross, axis=1) * 0.5
        facing = np.einsum("ij,ij->i", cross, mesh.normals[tris[:, 0]])

        degenerate = np.flatnonzero(area < DEGENERATE_AREA)
        if len(degenerate):
            errors.append(
                ValidationError(
                    severity="error",
                    element_type="Submesh",
                    element_id=sub.material.value,
                    message=(
                        f"{len(degenerate)} degenerate triangle(s), "
                        f"first at triangle {int(degenerate[0])}"
                    ),
                )
            )

        flipped = np.flatnonzero((facing <= 0.0) & (area >= DEGENERATE_AREA))
        if len(flipped):
            errors.append(
                ValidationError(
                    severity="error",
                    element_type="Submesh",
                    element_id=sub.material.value,
                    message=(
                        f"{len(flipped)} triangle(s) wound against their normal, "
                        f"first at triangle {int(flipped[0])}"
                    ),
                )
            )

    return errors


def _check_submeshes(mesh: Mesh) -> list[ValidationError]:
    errors: list[ValidationError] = []
    materials = [s.material for s in mesh.submeshes]
    if materials != list(Material):
        errors.append(
            ValidationError(
                severity="error",
                element_type="Mesh",
                element_id="submeshes",
                message=f"Submesh order {[m.value for m in materials]} is not wall/window/door/roof",
            )
        )

    expected_start = 0
    for sub in mesh.submeshes:
        if sub.index_start != expected_start:
            errors.append(
                ValidationError(
                    severity="error",
                    element_type="Submesh",
                    element_id=sub.material.value,
                    message=f"Submesh starts at {sub.index_start}, expected {expected_start}",
                )
            )
        if sub.index_count % 3 != 0:
            errors.append(
                ValidationError(
                    severity="error",
                    element_type="Submesh",
                    element_id=sub.material.value,
                    message=f"Submesh index count {sub.index_count} is not a multiple of 3",
                )
            )
        expected_start = sub.index_stop

    if expected_start != len(mesh.indices):
        errors.append(
            ValidationError(
                severity="error",
                element_type="Mesh",
                element_id="submeshes",
                message=f"Submeshes cover {expected_start} of {len(mesh.indices)} indices",
            )
        )
    return errors
