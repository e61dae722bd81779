"""Render plans, export hashing and export sizing.

The same RenderPlan drives both the live preview and the export render.
"""

from .export import ExportDimensions, calculate_export_dimensions, render_input_for
from .export_hash import create_export_hash, is_export_stale
from .plan import (
    CameraConfig,
    CompositingSettings,
    PlaneConfig,
    RenderPlan,
    RenderPlanInput,
    create_render_plan,
)

__all__ = [
    "ExportDimensions",
    "calculate_export_dimensions",
    "render_input_for",
    "create_export_hash",
    "is_export_stale",
    "CameraConfig",
    "CompositingSettings",
    "PlaneConfig",
    "RenderPlan",
    "RenderPlanInput",
    "create_render_plan",
]
