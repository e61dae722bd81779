"""Asset normalization to a bottom-center pivot.

Imported models arrive with arbitrary origins. This module computes the
offset that moves a model's pivot to bottom-center (horizontal center at
X=0, Z=0 and bottom at Y=0), which matches ground placements, along with
the model dimensions before and after its import scale.

The results are metadata only. Geometry is left untouched until render
time, where apply_normalization() produces an adjusted copy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    import trimesh
    from numpy.typing import NDArray

    from ..scene.transform import Transform

Vector3 = tuple[float, float, float]


class BoundingBox(BaseModel):
    """Axis-aligned bounding box.

    Callers must keep min[i] <= max[i]; it is not validated.
    """

    min: Vector3 = Field(description="Minimum XYZ corner")
    max: Vector3 = Field(description="Maximum XYZ corner")

    model_config = {"frozen": True}

    @classmethod
    def from_points(cls, points: NDArray[np.float64]) -> BoundingBox:
        """Create the tightest box around an Nx3 array of points."""
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3 or len(points) == 0:
            raise ValueError(f"Points must be a non-empty Nx3 array, got shape {points.shape}")
        return cls(
            min=tuple(points.min(axis=0).tolist()),
            max=tuple(points.max(axis=0).tolist()),
        )

    def corners(self) -> NDArray[np.float64]:
        """Return the 8 corner points as an 8x3 array."""
        (x0, y0, z0), (x1, y1, z1) = self.min, self.max
        return np.array([
            [x0, y0, z0],
            [x0, y0, z1],
            [x0, y1, z0],
            [x0, y1, z1],
            [x1, y0, z0],
            [x1, y0, z1],
            [x1, y1, z0],
            [x1, y1, z1],
        ], dtype=np.float64)


class NormalizedBounds(BaseModel):
    """Model dimensions along each axis."""

    width: float = Field(description="X extent")
    height: float = Field(description="Y extent")
    depth: float = Field(description="Z extent")

    model_config = {"frozen": True}


class AssetNormalizationResult(BaseModel):
    """Per-asset normalization metadata, computed once at import."""

    pivot_offset: Vector3 = Field(description="Offset to add to every vertex")
    original_bounds: NormalizedBounds
    normalized_bounds: NormalizedBounds = Field(
        description="Bounds after import scale"
    )
    import_scale: float = Field(default=1.0)

    model_config = {"frozen": True}


def compute_pivot_offset(bbox: BoundingBox) -> Vector3:
    """Compute the offset that moves the pivot to bottom-center.

    Bottom-center is the box center on X and Z and the box minimum on Y.
    The returned offset is the negation of that point, to be added to all
    vertices.
    """
    center_x = (bbox.min[0] + bbox.max[0]) / 2
    bottom_y = bbox.min[1]
    center_z = (bbox.min[2] + bbox.max[2]) / 2

    return (-center_x, -bottom_y, -center_z)


def compute_normalized_bounds(bbox: BoundingBox) -> NormalizedBounds:
    """Compute per-axis extents of a bounding box."""
    return NormalizedBounds(
        width=bbox.max[0] - bbox.min[0],
        height=bbox.max[1] - bbox.min[1],
        depth=bbox.max[2] - bbox.min[2],
    )


def apply_import_scale(bounds: NormalizedBounds, scale: float) -> NormalizedBounds:
    """Scale each extent by the import scale."""
    return NormalizedBounds(
        width=bounds.width * scale,
        height=bounds.height * scale,
        depth=bounds.depth * scale,
    )


def compute_asset_normalization(
    bbox: BoundingBox,
    import_scale: float = 1.0,
) -> AssetNormalizationResult:
    """Compute full normalization metadata for an asset.

    Does not mutate geometry. Callers apply pivot_offset and import_scale
    when instantiating the model.

    Args:
        bbox: Bounding box of the source geometry
        import_scale: Scale factor applied after re-rooting

    Returns:
        AssetNormalizationResult for storage alongside the asset
    """
    original_bounds = compute_normalized_bounds(bbox)
    return AssetNormalizationResult(
        pivot_offset=compute_pivot_offset(bbox),
        original_bounds=original_bounds,
        normalized_bounds=apply_import_scale(original_bounds, import_scale),
        import_scale=import_scale,
    )


def apply_normalization(
    mesh: trimesh.Trimesh,
    result: AssetNormalizationResult,
) -> trimesh.Trimesh:
    """Return a copy of a mesh re-rooted and scaled per the metadata.

    The pivot offset is applied first, then the import scale, so the
    bottom-center stays at the origin.
    """
    normalized = mesh.copy()
    normalized.apply_translation(result.pivot_offset)
    normalized.apply_scale(result.import_scale)
    return normalized


def transformed_bounds(
    result: AssetNormalizationResult,
    transform: Transform,
) -> BoundingBox:
    """World-space bounding box of a normalized asset under a placement.

    Args:
        result: Normalization metadata of the asset
        transform: Placement transform

    Returns:
        Axis-aligned box enclosing the transformed asset box
    """
    bounds = result.normalized_bounds
    half_w = bounds.width / 2
    half_d = bounds.depth / 2
    local = BoundingBox(
        min=(-half_w, 0.0, -half_d),
        max=(half_w, bounds.height, half_d),
    )
    return BoundingBox.from_points(transform.apply_to_points(local.corners()))
