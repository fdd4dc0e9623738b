"""Preview images using matplotlib.

- render_plan: top-down floor-count map of a plan with the door marked
- render_mesh: 3D view of a mesh, one color per material
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless rendering
import matplotlib.pyplot as plt
import matplotlib.patheffects as pe
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from building_mesh.export.obj import MATERIAL_COLORS
from building_mesh.models.mesh import Mesh
from building_mesh.models.plan import BuildingPlan

# Halo effect for text readability on any background
_TEXT_HALO = [pe.withStroke(linewidth=3, foreground="white")]


def render_plan(
    plan: BuildingPlan,
    output_path: str | Path,
    dpi: int = 120,
    show_labels: bool = True,
) -> Path:
    """Render the plan's floor counts as a top-down grid image.

    Args:
        plan: Plan to render.
        output_path: Output image path.
        dpi: Image resolution.
        show_labels: Write the floor count in each occupied cell.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    heights = np.ma.masked_where(~plan.footprint_array(), plan.heights_array())

    fig, ax = plt.subplots(1, 1, figsize=(7, 6))
    ax.set_aspect("equal")
    # grid x to image x, grid y to image y
    image = ax.imshow(
        heights.T, origin="lower", cmap="viridis",
        extent=(0, plan.width, 0, plan.depth),
    )
    fig.colorbar(image, ax=ax, label="Floors")

    if show_labels:
        for x, y in plan.occupied_cells():
            ax.text(
                x + 0.5, y + 0.5, str(plan.heights[x][y]),
                ha="center", va="center", fontsize=8, path_effects=_TEXT_HALO,
            )

    door = plan.door
    dx, dy = door.direction.offset
    ax.annotate(
        "",
        xy=(door.x + 0.5 + dx * 0.6, door.y + 0.5 + dy * 0.6),
        xytext=(door.x + 0.5, door.y + 0.5),
        arrowprops={"arrowstyle": "-|>", "color": "#D32F2F", "linewidth": 2},
    )

    ax.set_xticks(range(plan.width + 1))
    ax.set_yticks(range(plan.depth + 1))
    ax.grid(True, color="#BDBDBD", linewidth=0.5)
    ax.set_title(f"{plan.name} ({plan.config.roof_type.value} roof)")

    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path


def render_mesh(
    mesh: Mesh,
    output_path: str | Path,
    dpi: int = 120,
    elevation: float = 25.0,
    azimuth: float = -60.0,
) -> Path:
    """Render a 3D preview of a mesh, colored by submesh material."""
    output_path = Path(output_path)
    fig = plt.figure(figsize=(8, 7))
    ax = fig.add_subplot(111, projection="3d")

    for sub in mesh.submeshes:
        if sub.index_count == 0:
            continue
        # world Y is up; matplotlib's Z is up
        tris = mesh.positions[mesh.triangles(sub.material)][:, :, [0, 2, 1]]
        ax.add_collection3d(
            Poly3DCollection(
                tris, facecolor=MATERIAL_COLORS[sub.material],
                edgecolor="none", alpha=1.0,
            )
        )

    lo = mesh.bounds.min[[0, 2, 1]]
    hi = mesh.bounds.max[[0, 2, 1]]
    span = float(max((hi - lo).max(), 1.0))
    mid = (lo + hi) / 2.0
    ax.set_xlim(mid[0] - span / 2, mid[0] + span / 2)
    ax.set_ylim(mid[1] - span / 2, mid[1] + span / 2)
    ax.set_zlim(0, span)
    ax.view_init(elev=elevation, azim=azimuth)
    ax.set_xlabel("X")
    ax.set_ylabel("Z")
    ax.set_zlabel("Y")

    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path
