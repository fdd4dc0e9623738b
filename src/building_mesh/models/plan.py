"""Building plan: the abstract footprint description fed to the mesh engine.

A plan bundles the occupancy grid, the per-cell floor counts, the door
location and the synthesis configuration. Grids are indexed [x][y].
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from building_mesh.models.config import BuildingConfig
from building_mesh.models.geometry import Direction


class DoorLocation(BaseModel):
    """An occupied cell plus the side of it that holds the entrance door."""

    x: int = Field(ge=0)
    y: int = Field(ge=0)
    direction: Direction

    def matches(self, x: int, y: int, direction: Direction) -> bool:
        return self.x == x and self.y == y and self.direction == direction


class BuildingPlan(BaseModel):
    """Footprint, height grid, door and configuration for one building."""

    name: str = Field(default="Building", description="Plan name")
    footprint: list[list[bool]]
    heights: list[list[int]]
    door: DoorLocation
    config: BuildingConfig = Field(default_factory=BuildingConfig)
    seed: int | None = Field(default=None, description="Seed the plan was generated from")

    @field_validator("heights")
    @classmethod
    def non_negative_heights(cls, v: list[list[int]]) -> list[list[int]]:
        if any(h < 0 for column in v for h in column):
            raise ValueError("Floor counts must be non-negative")
        return v

    @model_validator(mode="after")
    def grids_aligned(self) -> BuildingPlan:
        if not self.footprint or not self.footprint[0]:
            raise ValueError("Footprint grid must not be empty")
        depth = len(self.footprint[0])
        if any(len(column) != depth for column in self.footprint):
            raise ValueError("Footprint grid must be rectangular")
        if len(self.heights) != len(self.footprint) or any(
            len(column) != depth for column in self.heights
        ):
            raise ValueError(
                f"Height grid must match footprint shape ({len(self.footprint)}x{depth})"
            )
        return self

    @property
    def width(self) -> int:
        return len(self.footprint)

    @property
    def depth(self) -> int:
        return len(self.footprint[0])

    def footprint_array(self) -> np.ndarray:
        return np.array(self.footprint, dtype=bool)

    def heights_array(self) -> np.ndarray:
        return np.array(self.heights, dtype=int)

    def occupied_cells(self) -> list[tuple[int, int]]:
        return [
            (x, y)
            for x in range(self.width)
            for y in range(self.depth)
            if self.footprint[x][y]
        ]

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> BuildingPlan:
        """Load a plan from a JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save the plan to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path
