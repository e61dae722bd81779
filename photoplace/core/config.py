"""Configuration management for PhotoPlace.

This module defines all configuration models using Pydantic for validation.
Configuration can be loaded from JSON files or constructed programmatically.

Render plan defaults (FOV, shadow, occlusion) are not configurable here;
they are part of the export hash contract and live in render.plan.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class CameraParams(BaseModel):
    """Camera parameters for the placement view."""

    camera_z: float = Field(default=5.0, gt=0, description="Camera distance along Z")
    pitch_min_deg: float = Field(default=-15.0, ge=-90, le=0, description="Lowest pitch on the slider")
    pitch_max_deg: float = Field(default=15.0, ge=0, le=90, description="Highest pitch on the slider")
    pitch_step_deg: float = Field(default=5.0, gt=0, description="Slider step in degrees")

    def pitch_steps(self) -> list[float]:
        """Return every pitch value the slider can produce, in order."""
        count = int(round((self.pitch_max_deg - self.pitch_min_deg) / self.pitch_step_deg))
        return [self.pitch_min_deg + i * self.pitch_step_deg for i in range(count + 1)]


class ExportParams(BaseModel):
    """Composite export parameters."""

    max_width: int = Field(default=2048, ge=1, description="Maximum export width in pixels")
    image_type: Literal["image/png", "image/jpeg"] = Field(
        default="image/png",
        description="Export image format"
    )


class PlacementParams(BaseModel):
    """Defaults applied to new placements."""

    renderer_version: str = Field(default="1.0.0", description="Renderer version stamped on placements")
    occlusion_dilate_px: int = Field(default=4, ge=0, description="Occlusion mask dilation in pixels")
    occlusion_feather_px: int = Field(default=3, ge=0, description="Occlusion mask feathering in pixels")
    seed_demo_assets: bool = Field(default=True, description="Seed demo assets into new stores")


class PhotoPlaceConfig(BaseModel):
    """Main configuration container."""

    camera: CameraParams = Field(default_factory=CameraParams)
    export: ExportParams = Field(default_factory=ExportParams)
    placement: PlacementParams = Field(default_factory=PlacementParams)

    @classmethod
    def from_file(cls, path: Path | str) -> PhotoPlaceConfig:
        """Load configuration from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def default(cls) -> PhotoPlaceConfig:
        """Create a default configuration."""
        return cls()
