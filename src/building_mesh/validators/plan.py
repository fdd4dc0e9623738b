"""Plan validation.

The mesh engine trusts its inputs. These checks catch the plans that would
give degenerate or surprising geometry (openings that do not fit a cell, door
on an interior face, occupied cells with no floors) before synthesis, and
report them instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass

from building_mesh.generators.footprint import MAX_FLOORS, MIN_FLOORS, exterior_faces
from building_mesh.models.config import BuildingConfig
from building_mesh.models.plan import BuildingPlan


@dataclass
class ValidationError:
    """A single validation issue."""

    severity: str  # "error" | "warning"
    element_type: str
    element_id: str
    message: str


def validate_config(config: BuildingConfig) -> list[ValidationError]:
    """Warn about openings that do not fit a cell or floor.

    Synthesis still runs for such configs; the openings come out degenerate
    or overlap the neighboring panel.
    """
    issues: list[str] = []
    horizontal, vertical = config.window_margins
    if 2 * horizontal >= config.cell_size:
        issues.append(f"Window margins {horizontal}m leave no glazing in a {config.cell_size}m cell")
    if 2 * vertical >= config.floor_height:
        issues.append(
            f"Window margins {vertical}m leave no glazing in a {config.floor_height}m floor"
        )
    if config.door_width >= config.cell_size:
        issues.append(f"Door width {config.door_width}m does not fit a {config.cell_size}m cell")
    if config.door_height >= config.floor_height:
        issues.append(
            f"Door height {config.door_height}m does not fit a {config.floor_height}m floor"
        )
    if 2 * config.door_frame_thickness >= config.door_width:
        issues.append("Door frame is thicker than half the door width")

    return [
        ValidationError(
            severity="warning",
            element_type="Config",
            element_id="config",
            message=message,
        )
        for message in issues
    ]


def validate_plan(plan: BuildingPlan) -> list[ValidationError]:
    """Check configuration, footprint, heights and door placement of a plan."""
    errors: list[ValidationError] = validate_config(plan.config)
    cells = plan.occupied_cells()

    if not cells:
        errors.append(
            ValidationError(
                severity="error",
                element_type="Footprint",
                element_id="footprint",
                message="Footprint has no occupied cells",
            )
        )
        return errors

    for x in range(plan.width):
        for y in range(plan.depth):
            floors = plan.heights[x][y]
            cell_id = f"({x}, {y})"
            if plan.footprint[x][y]:
                if floors == 0:
                    errors.append(
                        ValidationError(
                            severity="error",
                            element_type="Cell",
                            element_id=cell_id,
                            message=f"Occupied cell {cell_id} has 0 floors",
                        )
                    )
                elif not MIN_FLOORS <= floors <= MAX_FLOORS:
                    errors.append(
                        ValidationError(
                            severity="warning",
                            element_type="Cell",
                            element_id=cell_id,
                            message=(
                                f"Cell {cell_id} has {floors} floors, "
                                f"outside the usual {MIN_FLOORS}-{MAX_FLOORS}"
                            ),
                        )
                    )
            elif floors != 0:
                errors.append(
                    ValidationError(
                        severity="warning",
                        element_type="Cell",
                        element_id=cell_id,
                        message=f"Empty cell {cell_id} has {floors} floors; ignored",
                    )
                )

    door = plan.door
    door_id = f"({door.x}, {door.y}, {door.direction.value})"
    in_grid = door.x < plan.width and door.y < plan.depth
    if not in_grid or not plan.footprint[door.x][door.y]:
        errors.append(
            ValidationError(
                severity="error",
                element_type="Door",
                element_id=door_id,
                message=f"Door cell ({door.x}, {door.y}) is not part of the footprint",
            )
        )
    elif (door.x, door.y, door.direction) not in exterior_faces(plan.footprint_array()):
        errors.append(
            ValidationError(
                severity="error",
                element_type="Door",
                element_id=door_id,
                message=f"Door face {door_id} is not an exterior wall",
            )
        )

    return errors
