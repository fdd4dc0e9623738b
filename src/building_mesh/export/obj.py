"""Wavefront OBJ export.

Writes positions, UVs and normals once, then one ``usemtl`` group per
non-empty submesh, plus a sibling ``.mtl`` file with a flat color per
material. Face indices are 1-based and share the same index for v/vt/vn.
"""

from __future__ import annotations

from pathlib import Path

from building_mesh.models.mesh import Material, Mesh

# Diffuse colors used in the .mtl file
MATERIAL_COLORS: dict[Material, tuple[float, float, float]] = {
    Material.WALL: (0.78, 0.74, 0.68),
    Material.WINDOW: (0.35, 0.55, 0.75),
    Material.DOOR: (0.45, 0.30, 0.20),
    Material.ROOF: (0.55, 0.25, 0.20),
}


class OBJExporter:
    """Export a Mesh to an OBJ + MTL file pair."""

    def __init__(
        self,
        mesh: Mesh,
        name: str = "building",
        material_names: dict[Material, str] | None = None,
    ):
        self.mesh = mesh
        self.name = name
        self.material_names = {m: m.value for m in Material}
        if material_names:
            self.material_names.update(material_names)

    def export(self, output_path: str | Path) -> Path:
        """Write the OBJ (and its MTL next to it). Returns the OBJ path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        mtl_path = output_path.with_suffix(".mtl")

        with open(output_path, "w") as fobj:
            fobj.write(f"mtllib {mtl_path.name}\n")
            fobj.write(f"o {self.name}\n")
            for x, y, z in self.mesh.positions:
                fobj.write(f"v {x:.5f} {y:.5f} {z:.5f}\n")
            for u, v in self.mesh.uvs:
                fobj.write(f"vt {u:.5f} {v:.5f}\n")
            for x, y, z in self.mesh.normals:
                fobj.write(f"vn {x:.5f} {y:.5f} {z:.5f}\n")

            for sub in self.mesh.submeshes:
                if sub.index_count == 0:
                    continue
                material = self.material_names[sub.material]
                fobj.write(f"g {material}\n")
                fobj.write(f"usemtl {material}\n")
                for a, b, c in self.mesh.triangles(sub.material) + 1:
                    fobj.write(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}\n")

        with open(mtl_path, "w") as fmtl:
            for material in Material:
                r, g, b = MATERIAL_COLORS[material]
                fmtl.write(f"newmtl {self.material_names[material]}\n")
                fmtl.write(f"Kd {r:.3f} {g:.3f} {b:.3f}\n")
                fmtl.write("Ka 0 0 0\nKs 0 0 0\nd 1.0\nillum 1\n\n")

        return output_path
