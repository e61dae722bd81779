"""Render plan factory.

A render plan is a pure data structure describing what to render. The live
preview and the offline export both consume the same plan, so identical
inputs must always produce identical plans.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Defaults applied when an optional input is omitted (None)
DEFAULT_FOV = 50.0
DEFAULT_SHADOW_ENABLED = True
DEFAULT_OCCLUSION_ENABLED = False


class RenderPlanInput(BaseModel):
    """User-facing render parameters.

    None on an optional field means "omitted" and gets the default.
    """

    fov: float | None = Field(default=None, description="Field of view in degrees (default 50)")
    pitch: float = Field(description="Camera pitch in degrees")
    camera_z: float = Field(description="Camera distance along Z")
    shadow_enabled: bool | None = Field(default=None, description="Contact shadow (default on)")
    occlusion_enabled: bool | None = Field(default=None, description="Occlusion masking (default off)")

    model_config = {"frozen": True}

    def resolved_fov(self) -> float:
        return DEFAULT_FOV if self.fov is None else self.fov

    def resolved_shadow_enabled(self) -> bool:
        if self.shadow_enabled is None:
            return DEFAULT_SHADOW_ENABLED
        return self.shadow_enabled

    def resolved_occlusion_enabled(self) -> bool:
        if self.occlusion_enabled is None:
            return DEFAULT_OCCLUSION_ENABLED
        return self.occlusion_enabled


class CameraConfig(BaseModel):
    """Camera configuration for the 3D view."""

    fov: float = Field(description="Field of view in degrees")
    pitch: float = Field(description="Camera pitch in degrees")
    camera_z: float = Field(description="Camera distance along Z")

    model_config = {"frozen": True}


class PlaneConfig(BaseModel):
    """Shadow-catcher ground plane. Always at Y=0 and never visible."""

    y: float = 0.0
    visible: bool = False

    model_config = {"frozen": True}


class CompositingSettings(BaseModel):
    """Settings for compositing the render over the photo."""

    shadow_enabled: bool
    occlusion_enabled: bool

    model_config = {"frozen": True}


class RenderPlan(BaseModel):
    """Complete render plan for a scene + placement."""

    camera_config: CameraConfig
    plane_config: PlaneConfig = Field(default_factory=PlaneConfig)
    compositing_settings: CompositingSettings

    model_config = {"frozen": True}

    def to_json(self) -> str:
        """Serialize to JSON. Equal plans give byte-identical text."""
        return self.model_dump_json()


def create_render_plan(plan_input: RenderPlanInput) -> RenderPlan:
    """Create a render plan from input parameters.

    Pitch and camera Z pass through verbatim; no clamping happens here.
    """
    return RenderPlan(
        camera_config=CameraConfig(
            fov=plan_input.resolved_fov(),
            pitch=plan_input.pitch,
            camera_z=plan_input.camera_z,
        ),
        plane_config=PlaneConfig(y=0.0, visible=False),
        compositing_settings=CompositingSettings(
            shadow_enabled=plan_input.resolved_shadow_enabled(),
            occlusion_enabled=plan_input.resolved_occlusion_enabled(),
        ),
    )
