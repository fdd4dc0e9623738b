"""Synthesis configuration: opening and roof variants plus geometric constants.

Every numeric constant the mesh engine uses is a named field here, so a
caller can tune (and a test can read) margins, depths, pitch and overhang
without touching the builders.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class WindowType(str, Enum):
    """Window variant. Controls the inset margins of the glazing panel."""

    BIG_WINDOWS = "big_windows"
    TALL_WINDOWS = "tall_windows"


class DoorType(str, Enum):
    """Door variant. Double doors are wider and get a center divider."""

    SINGLE_DOOR = "single_door"
    DOUBLE_DOOR = "double_door"


class RoofType(str, Enum):
    """Roof variant, chosen once for the whole building."""

    GABLE = "gable"
    FLAT = "flat"


# (horizontal, vertical) frame margin around the glazing, in meters
WINDOW_MARGINS: dict[WindowType, tuple[float, float]] = {
    WindowType.BIG_WINDOWS: (0.3, 0.3),
    WindowType.TALL_WINDOWS: (0.8, 0.2),
}

DOOR_WIDTHS: dict[DoorType, float] = {
    DoorType.SINGLE_DOOR: 1.0,
    DoorType.DOUBLE_DOOR: 2.0,
}


class BuildingConfig(BaseModel):
    """Options for one synthesis call."""

    cell_size: float = Field(default=3.0, gt=0, description="World length of one grid cell")
    floor_height: float = Field(default=3.0, gt=0, description="World height of one floor")
    window_type: WindowType = WindowType.BIG_WINDOWS
    door_type: DoorType = DoorType.SINGLE_DOOR
    roof_type: RoofType = RoofType.FLAT
    roof_connection_overlap: float = Field(
        default=0.5,
        ge=0,
        description="Fraction of a cell that adjoining gable roofs extend into each other",
    )

    window_recess_depth: float = Field(default=0.15, gt=0)
    door_height: float = Field(default=2.2, gt=0)
    door_frame_thickness: float = Field(default=0.15, gt=0)
    door_recess_depth: float = Field(default=0.1, gt=0)
    door_divider_width: float = Field(default=0.1, gt=0)
    parapet_height: float = Field(default=0.6, gt=0)
    roof_pitch: float = Field(default=0.5, gt=0, description="Rise per unit of horizontal run")
    roof_overhang: float = Field(default=0.3, ge=0, description="Eave overhang in world units")
    uv_scale: float = Field(default=0.5, gt=0)
    height_epsilon: float = Field(
        default=1e-5, ge=0, description="Tolerance for comparing neighboring top heights"
    )

    @property
    def window_margins(self) -> tuple[float, float]:
        return WINDOW_MARGINS[self.window_type]

    @property
    def door_width(self) -> float:
        return DOOR_WIDTHS[self.door_type]
