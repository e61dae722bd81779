"""Mesh loading utilities using trimesh.

This module loads product models (GLB, GLTF, OBJ, etc.) and derives the
bounding box used for asset normalization.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import trimesh

from .normalize import AssetNormalizationResult, BoundingBox, compute_asset_normalization

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class MeshLoader:
    """Load a product model and compute its placement metadata."""

    SUPPORTED_FORMATS = {".glb", ".gltf", ".obj", ".stl", ".ply", ".off"}

    def __init__(self, path: str | Path):
        """Load a mesh from file.

        Args:
            path: Path to mesh file (GLB, GLTF, OBJ, etc.)
        """
        self.path = Path(path)

        if not self.path.exists():
            raise FileNotFoundError(f"Mesh file not found: {self.path}")

        if self.path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {self.path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        loaded = trimesh.load(str(self.path))

        # GLB/GLTF files load as scenes; bake node transforms and merge
        if isinstance(loaded, trimesh.Scene):
            meshes = [
                geom for geom in loaded.dump()
                if isinstance(geom, trimesh.Trimesh)
            ]
            if not meshes:
                raise ValueError("No valid meshes found in scene")
            loaded = trimesh.util.concatenate(meshes)

        self._mesh: trimesh.Trimesh = loaded
        logger.debug("Loaded %s (%d vertices)", self.path.name, self.num_vertices)

    @property
    def mesh(self) -> trimesh.Trimesh:
        """Return the loaded trimesh object."""
        return self._mesh

    @property
    def bounding_box(self) -> BoundingBox:
        """Return the axis-aligned bounding box of the model."""
        lo, hi = self._mesh.bounds
        return BoundingBox(min=tuple(lo.tolist()), max=tuple(hi.tolist()))

    @property
    def size(self) -> NDArray[np.float64]:
        """Return size of bounding box (x, y, z)."""
        return self._mesh.bounds[1] - self._mesh.bounds[0]

    @property
    def num_vertices(self) -> int:
        """Return number of vertices."""
        return len(self._mesh.vertices)

    @property
    def num_faces(self) -> int:
        """Return number of faces."""
        return len(self._mesh.faces)

    def normalization(self, import_scale: float = 1.0) -> AssetNormalizationResult:
        """Compute normalization metadata for this model."""
        return compute_asset_normalization(self.bounding_box, import_scale)

    def stats(self) -> dict:
        """Return statistics about the mesh."""
        bbox = self.bounding_box
        return {
            "path": str(self.path),
            "num_vertices": self.num_vertices,
            "num_faces": self.num_faces,
            "bounds_min": list(bbox.min),
            "bounds_max": list(bbox.max),
            "size": self.size.tolist(),
        }

    def __repr__(self) -> str:
        return (
            f"MeshLoader({self.path.name}, "
            f"{self.num_vertices} vertices, "
            f"{self.num_faces} faces, "
            f"size={self.size.round(2)})"
        )


def load_mesh(path: str | Path) -> trimesh.Trimesh:
    """Convenience function to load a mesh directly.

    Args:
        path: Path to mesh file

    Returns:
        trimesh.Trimesh object
    """
    return MeshLoader(path).mesh
