"""Mesh export: Wavefront OBJ and matplotlib previews."""

from building_mesh.export.obj import OBJExporter
from building_mesh.export.preview import render_mesh, render_plan

__all__ = ["OBJExporter", "render_mesh", "render_plan"]
