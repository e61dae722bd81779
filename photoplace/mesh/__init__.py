"""Mesh loading and asset normalization."""

from .loader import MeshLoader, load_mesh
from .normalize import (
    AssetNormalizationResult,
    BoundingBox,
    NormalizedBounds,
    apply_import_scale,
    apply_normalization,
    compute_asset_normalization,
    compute_normalized_bounds,
    compute_pivot_offset,
    transformed_bounds,
)

__all__ = [
    "MeshLoader",
    "load_mesh",
    "AssetNormalizationResult",
    "BoundingBox",
    "NormalizedBounds",
    "apply_import_scale",
    "apply_normalization",
    "compute_asset_normalization",
    "compute_normalized_bounds",
    "compute_pivot_offset",
    "transformed_bounds",
]
