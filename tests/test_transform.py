"""Tests for placement Transform utilities."""

import json

import numpy as np
import pytest
from pydantic import ValidationError

from photoplace.scene.transform import (
    ParseError,
    Transform,
    apply_uniform_scale,
    create_ground_placement,
    create_identity_transform,
    is_identity_rotation,
    parse_transform,
    serialize_transform,
)


class TestSerialization:
    """Test serialize_transform / parse_transform."""

    def test_roundtrip(self):
        """Test parse inverts serialize field for field."""
        t = Transform(
            position=(1.5, -2.25, 3.0),
            rotation=(0.0, 0.7071067811865476, 0.0, 0.7071067811865476),
            scale=(0.5, 0.5, 0.5),
        )
        assert parse_transform(serialize_transform(t)) == t

    def test_roundtrip_full_precision(self):
        """Test that awkward floats survive exactly."""
        t = Transform(
            position=(0.1 + 0.2, 1 / 3, -1e-17),
            rotation=(1e-300, 0.0, 0.0, 0.9999999999999999),
            scale=(123456789.123456789, 2.0 ** -40, 7.0),
        )
        recovered = parse_transform(serialize_transform(t))
        assert recovered.position == t.position
        assert recovered.rotation == t.rotation
        assert recovered.scale == t.scale

    def test_serialized_layout(self):
        """Test the JSON shape uses position/rotation/scale arrays."""
        data = json.loads(serialize_transform(create_identity_transform()))
        assert data == {
            "position": [0.0, 0.0, 0.0],
            "rotation": [0.0, 0.0, 0.0, 1.0],
            "scale": [1.0, 1.0, 1.0],
        }

    def test_parse_bytes(self):
        """Test parsing raw bytes as well as text."""
        text = serialize_transform(create_ground_placement(1.0, 2.0))
        assert parse_transform(text.encode()) == create_ground_placement(1.0, 2.0)

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        "[1, 2, 3]",
        "{}",
        '{"position": [1, 2, 3]}',
        '{"rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}',
        '{"position": [0, 0, 0], "rotation": [0, 0, 0, 1]}',
        '{"position": [0, 0], "rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}',
        '{"position": [0, 0, 0], "rotation": [0, 0, 1], "scale": [1, 1, 1]}',
        '{"position": ["a", 0, 0], "rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}',
        '{"position": [true, 0, 0], "rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}',
        '{"position": ["1", 0, 0], "rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}',
        '{"position": [0, 0, 0], "rotation": [0, 0, 0, 1], "scale": null}',
    ])
    def test_malformed_raises_parse_error(self, text):
        """Test malformed text raises ParseError."""
        with pytest.raises(ParseError):
            parse_transform(text)

    def test_integer_coordinates_accepted(self):
        """Test JSON integers are valid numbers."""
        t = parse_transform('{"position": [1, 0, -2], "rotation": [0, 0, 0, 1], "scale": [2, 2, 2]}')
        assert t == create_ground_placement(1.0, -2.0, scale=2.0)

    def test_transform_requires_every_field(self):
        """Test a transform cannot be built from partial fields."""
        with pytest.raises(ValidationError):
            Transform(position=(1.0, 2.0, 3.0))

    def test_parse_error_is_value_error(self):
        """Test ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_transform("{")


class TestIdentityRotation:
    """Test tolerance-based identity checks."""

    def test_exact_identity(self):
        assert is_identity_rotation((0.0, 0.0, 0.0, 1.0)) is True

    def test_near_identity(self):
        """Test floating point drift counts as identity."""
        assert is_identity_rotation((0.0001, 0.0, 0.0, 0.99999)) is True

    def test_quarter_turn_is_not_identity(self):
        assert is_identity_rotation((0.0, 0.707, 0.0, 0.707)) is False

    def test_tolerance_boundary(self):
        """Test components at or beyond 1e-3 are rejected."""
        assert is_identity_rotation((0.0009, 0.0, 0.0, 1.0)) is True
        assert is_identity_rotation((0.002, 0.0, 0.0, 1.0)) is False
        assert is_identity_rotation((0.0, 0.0, 0.0, 0.998)) is False

    def test_negated_identity_is_not_identity(self):
        """Test -identity is not treated as identity (w - 1 = -2)."""
        assert is_identity_rotation((0.0, 0.0, 0.0, -1.0)) is False


class TestConstructors:
    """Test identity and ground placement constructors."""

    def test_identity_transform(self):
        t = create_identity_transform()
        assert t.position == (0.0, 0.0, 0.0)
        assert t.rotation == (0.0, 0.0, 0.0, 1.0)
        assert t.scale == (1.0, 1.0, 1.0)

    def test_ground_placement(self):
        t = create_ground_placement(2.5, -4.0)
        assert t.position == (2.5, 0.0, -4.0)
        assert t.rotation == (0.0, 0.0, 0.0, 1.0)
        assert t.scale == (1.0, 1.0, 1.0)

    def test_ground_placement_scale(self):
        t = create_ground_placement(0.0, 0.0, scale=3.0)
        assert t.scale == (3.0, 3.0, 3.0)

    def test_transform_is_frozen(self):
        """Test transforms cannot be mutated in place."""
        t = create_identity_transform()
        with pytest.raises(ValidationError):
            t.position = (1.0, 1.0, 1.0)


class TestUniformScale:
    """Test apply_uniform_scale."""

    def test_scale_composition(self):
        t = Transform(position=(1.0, 2.0, 3.0), rotation=(0.0, 0.0, 0.0, 1.0), scale=(0.5, 0.5, 0.5))
        scaled = apply_uniform_scale(t, 2.0)
        assert scaled.scale == (1.0, 1.0, 1.0)
        assert scaled.position == (1.0, 2.0, 3.0)

    def test_non_uniform_scale_multiplied_per_axis(self):
        t = Transform(position=(0.0, 0.0, 0.0), rotation=(0.0, 0.0, 0.0, 1.0), scale=(1.0, 2.0, 4.0))
        assert apply_uniform_scale(t, 0.5).scale == (0.5, 1.0, 2.0)

    def test_input_untouched(self):
        """Test the original transform is not modified."""
        rotation = (0.0, 0.7071067811865476, 0.0, 0.7071067811865476)
        t = Transform(position=(1.0, 0.0, 1.0), rotation=rotation, scale=(2.0, 2.0, 2.0))
        scaled = apply_uniform_scale(t, 3.0)
        assert t.scale == (2.0, 2.0, 2.0)
        assert scaled is not t
        assert scaled.rotation == rotation


class TestMatrix:
    """Test matrix conversion used for world-space bounds."""

    def test_identity_matrix(self):
        np.testing.assert_array_almost_equal(
            create_identity_transform().to_matrix(), np.eye(4)
        )

    def test_apply_to_points(self):
        """Test scale, then rotate, then translate."""
        # 90 degrees about +Y: +X maps to -Z
        half = np.sqrt(0.5)
        t = Transform(
            position=(10.0, 0.0, 0.0),
            rotation=(0.0, half, 0.0, half),
            scale=(2.0, 2.0, 2.0),
        )
        result = t.apply_to_points(np.array([[1.0, 0.0, 0.0]]))
        np.testing.assert_array_almost_equal(result[0], [10.0, 0.0, -2.0])
