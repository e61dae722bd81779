"""Tests for the render plan factory and export helpers."""

import json

import pytest

from photoplace.render.export import calculate_export_dimensions, render_input_for
from photoplace.render.plan import RenderPlanInput, create_render_plan
from photoplace.scene.records import Placement, PlacementRenderSettings, Scene


class TestCreateRenderPlan:
    """Test create_render_plan defaults and pass-through."""

    def test_deterministic(self):
        """Test identical inputs give equal, byte-identical plans."""
        plan_input = RenderPlanInput(fov=50, pitch=0, camera_z=5)

        plan1 = create_render_plan(plan_input)
        plan2 = create_render_plan(plan_input)

        assert plan1 == plan2
        assert plan1.to_json() == plan2.to_json()

    def test_omitted_and_explicit_defaults_match(self):
        omitted = create_render_plan(RenderPlanInput(pitch=0, camera_z=5))
        explicit = create_render_plan(RenderPlanInput(
            fov=50, pitch=0, camera_z=5, shadow_enabled=True, occlusion_enabled=False,
        ))
        assert omitted.to_json() == explicit.to_json()

    def test_default_fov(self):
        plan = create_render_plan(RenderPlanInput(pitch=0, camera_z=5))
        assert plan.camera_config.fov == 50

    def test_explicit_fov(self):
        plan = create_render_plan(RenderPlanInput(fov=60, pitch=0, camera_z=5))
        assert plan.camera_config.fov == 60

    def test_camera_config(self):
        plan = create_render_plan(RenderPlanInput(fov=55, pitch=-10, camera_z=8))
        assert plan.camera_config.fov == 55
        assert plan.camera_config.pitch == -10
        assert plan.camera_config.camera_z == 8

    def test_plane_is_invisible_at_ground(self):
        plan = create_render_plan(RenderPlanInput(pitch=12, camera_z=3, shadow_enabled=False))
        assert plan.plane_config.y == 0
        assert plan.plane_config.visible is False

    def test_compositing_defaults(self):
        plan = create_render_plan(RenderPlanInput(pitch=0, camera_z=5))
        assert plan.compositing_settings.shadow_enabled is True
        assert plan.compositing_settings.occlusion_enabled is False

    def test_compositing_overrides(self):
        plan = create_render_plan(RenderPlanInput(
            pitch=0, camera_z=5, shadow_enabled=False, occlusion_enabled=True,
        ))
        assert plan.compositing_settings.shadow_enabled is False
        assert plan.compositing_settings.occlusion_enabled is True

    @pytest.mark.parametrize("pitch", [-15, -10, -5, 0, 5, 10, 15])
    def test_pitch_passes_through(self, pitch):
        plan = create_render_plan(RenderPlanInput(pitch=pitch, camera_z=5))
        assert plan.camera_config.pitch == pitch

    def test_no_clamping(self):
        """Test out-of-slider values are not clamped by the factory."""
        plan = create_render_plan(RenderPlanInput(pitch=-80, camera_z=0.25))
        assert plan.camera_config.pitch == -80
        assert plan.camera_config.camera_z == 0.25

    def test_json_layout(self):
        data = json.loads(create_render_plan(RenderPlanInput(pitch=5, camera_z=5)).to_json())
        assert data == {
            "camera_config": {"fov": 50.0, "pitch": 5.0, "camera_z": 5.0},
            "plane_config": {"y": 0.0, "visible": False},
            "compositing_settings": {"shadow_enabled": True, "occlusion_enabled": False},
        }

    def test_pitch_required(self):
        with pytest.raises(ValueError):
            RenderPlanInput(camera_z=5)


class TestExportDimensions:
    """Test aspect-preserving export sizing."""

    def test_fits(self):
        dims = calculate_export_dimensions(1600, 1200)
        assert (dims.width, dims.height, dims.scale) == (1600, 1200, 1.0)

    def test_exact_max_width(self):
        dims = calculate_export_dimensions(2048, 1000)
        assert (dims.width, dims.height, dims.scale) == (2048, 1000, 1.0)

    def test_capped(self):
        dims = calculate_export_dimensions(4096, 3072)
        assert dims.width == 2048
        assert dims.height == 1536
        assert dims.scale == 0.5

    def test_rounds_half_up(self):
        # 3 * 0.5 = 1.5 rounds to 2
        dims = calculate_export_dimensions(4, 3, max_width=2)
        assert dims.height == 2

    def test_custom_max_width(self):
        dims = calculate_export_dimensions(1000, 500, max_width=100)
        assert (dims.width, dims.height) == (100, 50)


class TestRenderInputFor:
    """Test building render input from stored records."""

    def _placement(self, **render) -> Placement:
        return Placement(
            scene_id="scn_test",
            asset_id="ast_test",
            render=PlacementRenderSettings(**render),
        )

    def test_uncalibrated_scene(self):
        plan_input = render_input_for(Scene(), self._placement())
        assert plan_input.fov is None
        assert plan_input.pitch == 0
        assert plan_input.camera_z == 5
        assert plan_input.shadow_enabled is True
        assert plan_input.occlusion_enabled is False

    def test_user_overrides_win(self):
        scene = Scene(auto_camera_fov_deg=62, user_camera_fov_deg=45, user_pitch_deg=-5)
        plan_input = render_input_for(scene, self._placement(occlusion_enabled=True), camera_z=7)
        assert plan_input.fov == 45
        assert plan_input.pitch == -5
        assert plan_input.camera_z == 7
        assert plan_input.occlusion_enabled is True

    def test_auto_fov_fallback(self):
        plan_input = render_input_for(Scene(auto_camera_fov_deg=62), self._placement())
        assert plan_input.fov == 62
