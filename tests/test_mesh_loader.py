"""Tests for MeshLoader."""

from pathlib import Path

import numpy as np
import pytest
import trimesh

from photoplace.mesh.loader import MeshLoader, load_mesh


@pytest.fixture
def box_mesh() -> trimesh.Trimesh:
    """Box spanning x in [2, 4], y in [1, 3], z in [-2, 0]."""
    mesh = trimesh.creation.box(extents=[2, 2, 2])
    mesh.apply_translation([3.0, 2.0, -1.0])
    return mesh


@pytest.fixture
def stl_path(tmp_path: Path, box_mesh) -> Path:
    path = tmp_path / "box.stl"
    box_mesh.export(str(path))
    return path


@pytest.fixture
def glb_path(tmp_path: Path, box_mesh) -> Path:
    path = tmp_path / "box.glb"
    trimesh.Scene(box_mesh).export(str(path))
    return path


class TestMeshLoader:
    """Test loading models and deriving placement metadata."""

    def test_load_stl(self, stl_path):
        loader = MeshLoader(stl_path)
        assert loader.num_faces == 12
        np.testing.assert_array_almost_equal(loader.bounding_box.min, [2, 1, -2])
        np.testing.assert_array_almost_equal(loader.bounding_box.max, [4, 3, 0])

    def test_load_glb_scene(self, glb_path):
        loader = MeshLoader(glb_path)
        assert isinstance(loader.mesh, trimesh.Trimesh)
        np.testing.assert_array_almost_equal(loader.size, [2, 2, 2])

    def test_normalization(self, stl_path):
        result = MeshLoader(stl_path).normalization(import_scale=0.5)
        np.testing.assert_array_almost_equal(result.pivot_offset, [-3, -1, 1])
        assert result.normalized_bounds.height == pytest.approx(1.0)

    def test_stats(self, stl_path):
        stats = MeshLoader(stl_path).stats()
        assert stats["num_vertices"] == 8
        assert stats["path"] == str(stl_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MeshLoader(tmp_path / "missing.glb")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "model.fbx"
        path.write_bytes(b"")
        with pytest.raises(ValueError, match="Unsupported format"):
            MeshLoader(path)

    def test_load_mesh(self, stl_path):
        assert isinstance(load_mesh(stl_path), trimesh.Trimesh)
