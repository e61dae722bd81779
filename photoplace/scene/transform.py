"""Placement transform utilities.

Provides the Transform value type (position + quaternion rotation + scale)
used by placement records, plus helpers for serialization, identity checks
and uniform scaling.

Coordinate system: right-handed, +Y up, +X right, -Z forward.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field, ValidationError
from scipy.spatial.transform import Rotation

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]

# Tolerance for identity rotation checks
IDENTITY_EPSILON = 1e-3

_IDENTITY_QUATERNION: Quaternion = (0.0, 0.0, 0.0, 1.0)


class ParseError(ValueError):
    """Raised when serialized transform text cannot be decoded."""


class Transform(BaseModel):
    """Rigid-body placement: position + rotation + scale.

    Attributes:
        position: XYZ position in scene units
        rotation: Unit quaternion as (x, y, z, w). Not renormalized here.
        scale: Per-axis scale factors
    """

    position: Vector3 = Field(description="XYZ position")
    rotation: Quaternion = Field(description="Rotation quaternion (x, y, z, w)")
    scale: Vector3 = Field(description="XYZ scale factors")

    model_config = {"frozen": True}

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to 4x4 homogeneous transformation matrix.

        The transformation order is: Scale -> Rotate -> Translate
        This means the matrix is built as: T @ R @ S

        Returns:
            4x4 transformation matrix
        """
        s = np.diag([*self.scale, 1.0]).astype(np.float64)

        # scipy uses scalar-last (x, y, z, w), same as the stored layout
        r = np.eye(4, dtype=np.float64)
        r[:3, :3] = Rotation.from_quat(self.rotation).as_matrix()

        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = self.position

        return t @ r @ s

    def apply_to_points(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply transformation to an Nx3 array of points.

        Args:
            points: Nx3 array of XYZ coordinates

        Returns:
            Transformed Nx3 array of points
        """
        points = np.asarray(points, dtype=np.float64)
        ones = np.ones((len(points), 1), dtype=np.float64)
        homogeneous = np.hstack([points, ones])

        transformed = (self.to_matrix() @ homogeneous.T).T
        return transformed[:, :3]

    def __repr__(self) -> str:
        return (
            f"Transform(pos={self.position}, "
            f"rot={self.rotation}, scale={self.scale})"
        )


def serialize_transform(transform: Transform) -> str:
    """Serialize a transform to JSON text.

    Floats are written with shortest round-trip precision, so
    parse_transform(serialize_transform(t)) == t for finite values.
    """
    return transform.model_dump_json()


def parse_transform(text: str | bytes) -> Transform:
    """Parse a transform from JSON text.

    Raises:
        ParseError: If the text is not valid JSON or does not describe a
            transform (missing fields, wrong arity, non-numeric values).
    """
    try:
        # strict: reject booleans and numeric strings as coordinates
        return Transform.model_validate_json(text, strict=True)
    except ValidationError as e:
        raise ParseError(f"Invalid transform: {e}") from e


def is_identity_rotation(rotation: Quaternion) -> bool:
    """Check if a quaternion is the identity rotation, within tolerance.

    Near-identity rotations from floating point drift count as identity.
    """
    delta = np.asarray(rotation, dtype=np.float64) - _IDENTITY_QUATERNION
    return bool(np.all(np.abs(delta) < IDENTITY_EPSILON))


def create_identity_transform() -> Transform:
    """Return identity transform (origin, no rotation, unit scale)."""
    return Transform(
        position=(0.0, 0.0, 0.0),
        rotation=_IDENTITY_QUATERNION,
        scale=(1.0, 1.0, 1.0),
    )


def apply_uniform_scale(transform: Transform, factor: float) -> Transform:
    """Multiply the existing scale by a uniform factor.

    Returns a new transform; position and rotation are carried over.
    """
    sx, sy, sz = transform.scale
    return transform.model_copy(
        update={"scale": (sx * factor, sy * factor, sz * factor)}
    )


def create_ground_placement(x: float, z: float, scale: float = 1.0) -> Transform:
    """Create a transform resting on the ground plane (Y = 0).

    Rotation is identity and scale is uniform.
    """
    return Transform(
        position=(x, 0.0, z),
        rotation=_IDENTITY_QUATERNION,
        scale=(scale, scale, scale),
    )
