"""Export preparation helpers.

Builds render plan input from stored records and sizes the composite
image. Pixel compositing itself happens in the rendering layer.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .plan import RenderPlanInput

if TYPE_CHECKING:
    from ..scene.records import Placement, Scene

MAX_EXPORT_WIDTH = 2048
DEFAULT_CAMERA_Z = 5.0


class ExportDimensions(BaseModel):
    """Output image size and the scale applied to the source photo."""

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    scale: float = Field(gt=0)

    model_config = {"frozen": True}


def calculate_export_dimensions(
    source_width: int,
    source_height: int,
    max_width: int = MAX_EXPORT_WIDTH,
) -> ExportDimensions:
    """Fit the photo within max_width, preserving aspect ratio.

    Photos that already fit keep their size. Otherwise the height is
    rounded half up.
    """
    if source_width <= max_width:
        return ExportDimensions(width=source_width, height=source_height, scale=1.0)

    scale = max_width / source_width
    return ExportDimensions(
        width=max_width,
        height=max(1, math.floor(source_height * scale + 0.5)),
        scale=scale,
    )


def render_input_for(
    scene: Scene,
    placement: Placement,
    camera_z: float = DEFAULT_CAMERA_Z,
) -> RenderPlanInput:
    """Build render plan input from a scene's calibration and a placement.

    FOV comes from the user override, then the auto-detected value, and is
    left unset (default) when neither exists. Pitch falls back to level.
    """
    return RenderPlanInput(
        fov=scene.camera_fov_deg,
        pitch=scene.user_pitch_deg if scene.user_pitch_deg is not None else 0.0,
        camera_z=camera_z,
        shadow_enabled=placement.render.shadow_enabled,
        occlusion_enabled=placement.render.occlusion_enabled,
    )
