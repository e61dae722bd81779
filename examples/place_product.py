#!/usr/bin/env python3
"""Example: Place a product in a photo and prepare an export.

This script demonstrates the basic workflow for PhotoPlace:
1. Register an asset with normalization metadata
2. Commit a scene photo and place the asset on the ground
3. Build the render plan shared by preview and export
4. Record an export and detect when it goes stale

Run with: python examples/place_product.py
"""

import trimesh

from photoplace import PlacementService, create_export_hash, create_render_plan
from photoplace.mesh.normalize import BoundingBox, apply_normalization
from photoplace.render.export import calculate_export_dimensions, render_input_for
from photoplace.render.export_hash import is_export_stale
from photoplace.scene.transform import create_ground_placement


def create_test_product() -> trimesh.Trimesh:
    """Create an off-center box standing in for an imported model."""
    mesh = trimesh.creation.box(extents=[0.6, 0.9, 0.5])
    mesh.apply_translation([1.0, 2.0, -3.0])
    return mesh


def main():
    service = PlacementService()

    print("PhotoPlace - Place Product Example")
    print("=" * 40)

    print("\n1. Registering asset...")
    mesh = create_test_product()
    asset = service.register_asset(
        name="Side Table",
        glb_url="/assets/side-table.glb",
        bbox=BoundingBox.from_points(mesh.vertices),
    )
    normalized = apply_normalization(mesh, asset.normalization)
    print(f"   Pivot offset: {asset.normalization.pivot_offset}")
    print(f"   Normalized bounds: {normalized.bounds.tolist()}")

    print("\n2. Committing scene and placing asset...")
    scene = service.create_scene()
    scene = service.commit_scene(scene.id, "/uploads/room.jpg", "/uploads/room-working.jpg", 4032, 3024)
    placement = service.create_placement(
        scene.id,
        asset.id,
        transform=create_ground_placement(0.5, -1.0),
    )
    print(f"   Placement {placement.id} at {placement.transform.position}")

    print("\n3. Building render plan...")
    plan_input = render_input_for(scene, placement)
    print(f"   {create_render_plan(plan_input).to_json()}")

    print("\n4. Exporting...")
    dims = calculate_export_dimensions(scene.photo_working_width, scene.photo_working_height)
    export = service.create_export(placement.id, dims.width, dims.height, create_export_hash(plan_input))
    export = service.commit_export(export.id, f"/exports/{export.id}.png")
    print(f"   {dims.width}x{dims.height} export, hash {export.render_settings_hash}")

    scene = service.calibrate_scene(scene.id, pitch_deg=10)
    stale = is_export_stale(export, render_input_for(scene, placement))
    print(f"   Stale after pitch change: {stale}")

    print("\n" + "=" * 40)
    print("Done!")


if __name__ == "__main__":
    main()
