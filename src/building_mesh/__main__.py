"""Building Mesh CLI.

Usage:
    python -m building_mesh <command> [options]

Every command prints a JSON object to stdout with an "ok" flag. Failures
print {"ok": false, "error": ...} and exit with status 1.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from building_mesh.generators.building import generate_from_plan
from building_mesh.generators.footprint import FootprintShape, generate_plan
from building_mesh.models.config import DoorType, RoofType, WindowType
from building_mesh.models.plan import BuildingPlan
from building_mesh.validators import validate_mesh, validate_plan

app = typer.Typer(
    name="building_mesh",
    help="Procedural building geometry from footprint grids.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _load_plan(path: Path) -> BuildingPlan:
    """Load a plan file, turning I/O and schema problems into CLI errors."""
    if not path.exists():
        _fail(f"Plan not found: {path}")
    try:
        return BuildingPlan.load(path)
    except PydanticValidationError as e:
        _fail(f"Invalid plan {path}: {e.error_count()} error(s): {e.errors()[0]['msg']}")


def _issues(errors: list) -> dict:
    return {
        "errors": sum(1 for e in errors if e.severity == "error"),
        "warnings": sum(1 for e in errors if e.severity == "warning"),
        "details": [
            {"severity": e.severity, "element_type": e.element_type,
             "element_id": e.element_id, "message": e.message}
            for e in errors
        ],
    }


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr")):
    """Procedural building geometry from footprint grids."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def version() -> None:
    """Show version."""
    from building_mesh import __version__

    _output({"ok": True, "version": __version__})


@app.command()
def plan(
    seed: int = typer.Option(0, "--seed", help="Random seed"),
    output: Path = typer.Option(..., "--output", "-o", help="Plan JSON file to write"),
    grid_size: int = typer.Option(10, "--grid-size", help="Grid side length (>= 10)"),
    shape: Optional[FootprintShape] = typer.Option(None, "--shape", help="Footprint template"),
    roof: Optional[RoofType] = typer.Option(None, "--roof", help="Force roof type"),
    window: Optional[WindowType] = typer.Option(None, "--window", help="Force window type"),
    door: Optional[DoorType] = typer.Option(None, "--door", help="Force door type"),
    name: str = typer.Option("Building", "--name", help="Plan name"),
):
    """Generate a random building plan from a seed."""
    try:
        result = generate_plan(
            seed, grid_size=grid_size, shape=shape, name=name,
            roof_type=roof, window_type=window, door_type=door,
        )
    except ValueError as e:
        _fail(str(e))

    path = result.save(output)
    _output({
        "ok": True,
        "plan": str(path),
        "seed": seed,
        "cells": len(result.occupied_cells()),
        "door": result.door.model_dump(mode="json"),
        "config": result.config.model_dump(
            mode="json", include={"window_type", "door_type", "roof_type"}
        ),
    })


@app.command()
def build(
    plan_path: Path = typer.Argument(..., help="Plan JSON file"),
    output: Path = typer.Option(..., "--output", "-o", help="OBJ file to write"),
):
    """Build the mesh for a plan and export it as OBJ."""
    from building_mesh.export.obj import OBJExporter

    building_plan = _load_plan(plan_path)
    mesh = generate_from_plan(building_plan)
    path = OBJExporter(mesh, name=building_plan.name).export(output)
    _output({"ok": True, "exported": str(path), "mesh": mesh.summary()})


@app.command()
def validate(plan_path: Path = typer.Argument(..., help="Plan JSON file")):
    """Validate a plan and the mesh it produces."""
    building_plan = _load_plan(plan_path)
    mesh = generate_from_plan(building_plan)
    _output({
        "ok": True,
        "plan": _issues(validate_plan(building_plan)),
        "mesh": _issues(validate_mesh(mesh)),
    })


@app.command()
def render(
    plan_path: Path = typer.Argument(..., help="Plan JSON file"),
    output_dir: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
):
    """Render plan and mesh previews to PNG."""
    from building_mesh.export.preview import render_mesh, render_plan

    building_plan = _load_plan(plan_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = plan_path.stem
    plan_png = render_plan(building_plan, output_dir / f"{stem}_plan.png")
    mesh_png = render_mesh(generate_from_plan(building_plan), output_dir / f"{stem}_mesh.png")
    _output({"ok": True, "rendered": [str(plan_png), str(mesh_png)]})


if __name__ == "__main__":
    app()
