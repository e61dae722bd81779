"""Record models for scenes, assets, placements and exports.

Records are plain pydantic models. The store replaces them wholesale on
update (model_copy) rather than mutating them in place.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from ..mesh.normalize import AssetNormalizationResult
from .transform import Transform, create_identity_transform

AnalysisStatus = Literal["NOT_STARTED", "RUNNING", "DONE", "FAILED"]
DepthQuality = Literal["LOW", "MED", "HIGH"]
CalibrationSource = Literal["AUTO", "USER", "AUTO_PLUS_USER"]
AssetUnits = Literal["METERS", "CENTIMETERS", "UNKNOWN"]
PivotMode = Literal["BOTTOM_CENTER"]
ExportType = Literal["image/png", "image/jpeg"]
RecordKind = Literal["scene", "asset", "placement", "export"]

ID_PREFIX: dict[str, str] = {
    "scene": "scn",
    "asset": "ast",
    "placement": "plc",
    "export": "exp",
    "job": "job",
}

_ID_LENGTH = 12


def generate_id(kind: str) -> str:
    """Generate a prefixed id such as ``scn_a1b2c3d4e5f6``."""
    return f"{ID_PREFIX[kind]}_{uuid.uuid4().hex[:_ID_LENGTH]}"


def entity_type_of(record_id: str) -> str | None:
    """Return the entity kind encoded in an id, or None if unrecognized."""
    prefix = record_id.split("_", 1)[0]
    for kind, known in ID_PREFIX.items():
        if known == prefix:
            return kind
    return None


def is_valid_id(record_id: str, kind: str) -> bool:
    """Check that an id carries the prefix for ``kind`` and a suffix."""
    prefix = ID_PREFIX[kind]
    return record_id.startswith(f"{prefix}_") and len(record_id) > len(prefix) + 1


class NormalizedLine(BaseModel):
    """Line in normalized image coordinates (0-1 range)."""

    x1: float = Field(ge=0, le=1)
    y1: float = Field(ge=0, le=1)
    x2: float = Field(ge=0, le=1)
    y2: float = Field(ge=0, le=1)


class Scene(BaseModel):
    """A background photo plus derived analysis and user calibration."""

    id: str = Field(default_factory=lambda: generate_id("scene"))

    # Original URL is immutable once committed
    photo_original_url: str | None = None
    photo_working_url: str | None = None
    photo_original_width: int | None = None
    photo_original_height: int | None = None
    photo_working_width: int | None = None
    photo_working_height: int | None = None
    photo_exif_orientation: int | None = None

    analysis_status: AnalysisStatus = "NOT_STARTED"
    analysis_model_version: str | None = None
    depth_map_url: str | None = None
    depth_confidence: float | None = None
    depth_quality: DepthQuality | None = None

    auto_horizon_line: NormalizedLine | None = None
    auto_camera_fov_deg: float | None = None

    calibration_source: CalibrationSource = "AUTO"
    user_horizon_line: NormalizedLine | None = None
    user_camera_fov_deg: float | None = None
    user_pitch_deg: float | None = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    expires_at: datetime | None = None

    @property
    def is_committed(self) -> bool:
        return self.photo_original_url is not None

    @property
    def camera_fov_deg(self) -> float | None:
        """User FOV override if set, else the auto-detected FOV."""
        if self.user_camera_fov_deg is not None:
            return self.user_camera_fov_deg
        return self.auto_camera_fov_deg


class AssetVariant(BaseModel):
    """Material variant for an asset."""

    id: str
    label: str
    material_params: dict[str, Any] = Field(default_factory=dict)


class Asset(BaseModel):
    """A curated 3D product model."""

    id: str = Field(default_factory=lambda: generate_id("asset"))
    name: str
    glb_url: str
    units: AssetUnits = "METERS"
    import_scale: float = Field(default=1.0, gt=0)
    pivot_mode: PivotMode = "BOTTOM_CENTER"
    default_variants: list[AssetVariant] = Field(default_factory=list)
    thumbnail_url: str | None = None
    normalization: AssetNormalizationResult | None = Field(
        default=None,
        description="Pivot and bounds metadata computed at import"
    )
    created_at: datetime = Field(default_factory=datetime.now)


class PlacementRenderSettings(BaseModel):
    """Per-placement compositing settings."""

    shadow_enabled: bool = True
    occlusion_enabled: bool = False
    occlusion_dilate_px: int = Field(default=4, ge=0)
    occlusion_feather_px: int = Field(default=3, ge=0)


class Placement(BaseModel):
    """One instance of an asset placed in a scene."""

    id: str = Field(default_factory=lambda: generate_id("placement"))
    scene_id: str
    asset_id: str
    transform: Transform = Field(default_factory=create_identity_transform)
    render: PlacementRenderSettings = Field(default_factory=PlacementRenderSettings)
    variant_id: str | None = None
    renderer_version: str = "1.0.0"
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class ExportRecord(BaseModel):
    """A single exported composite image."""

    id: str = Field(default_factory=lambda: generate_id("export"))
    placement_id: str
    type: ExportType = "image/png"
    url: str | None = None
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    render_settings_hash: str = Field(pattern=r"^[0-9a-f]{8}$")
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_committed(self) -> bool:
        return self.url is not None
