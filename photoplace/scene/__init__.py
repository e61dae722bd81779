"""Placement transforms and scene/asset/placement/export records.

This module provides the placement Transform value type plus the record
models and the injectable store that manages their lifecycle.
"""

from .transform import (
    ParseError,
    Transform,
    apply_uniform_scale,
    create_ground_placement,
    create_identity_transform,
    is_identity_rotation,
    parse_transform,
    serialize_transform,
)
from .records import Asset, ExportRecord, Placement, PlacementRenderSettings, Scene
from .store import (
    MemoryRecordStore,
    PlacementService,
    RecordNotFoundError,
    RecordStore,
    SceneAlreadyCommittedError,
)

__all__ = [
    "ParseError",
    "Transform",
    "apply_uniform_scale",
    "create_ground_placement",
    "create_identity_transform",
    "is_identity_rotation",
    "parse_transform",
    "serialize_transform",
    "Asset",
    "ExportRecord",
    "Placement",
    "PlacementRenderSettings",
    "Scene",
    "MemoryRecordStore",
    "PlacementService",
    "RecordNotFoundError",
    "RecordStore",
    "SceneAlreadyCommittedError",
]
