"""PhotoPlace - Place 3D product models into photos.

Deterministic core for a photo compositing app: placement transforms,
asset pivot normalization, render plans shared by preview and export,
and export fingerprints for staleness checks.
"""

__version__ = "0.1.0"

from .core.config import PhotoPlaceConfig
from .mesh.loader import MeshLoader, load_mesh
from .mesh.normalize import (
    AssetNormalizationResult,
    BoundingBox,
    NormalizedBounds,
    compute_asset_normalization,
)
from .render.export_hash import create_export_hash
from .render.plan import RenderPlan, RenderPlanInput, create_render_plan
from .scene.store import MemoryRecordStore, PlacementService
from .scene.transform import ParseError, Transform

__all__ = [
    "PhotoPlaceConfig",
    "MeshLoader",
    "load_mesh",
    "AssetNormalizationResult",
    "BoundingBox",
    "NormalizedBounds",
    "compute_asset_normalization",
    "create_export_hash",
    "RenderPlan",
    "RenderPlanInput",
    "create_render_plan",
    "MemoryRecordStore",
    "PlacementService",
    "ParseError",
    "Transform",
]
