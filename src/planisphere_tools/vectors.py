"""Vector3 and RotationMatrix primitives on numpy arrays.

A Vector3 is a float ndarray of shape (3,); a RotationMatrix is a float ndarray
of shape (3, 3) whose rows are orthonormal. Functions return new arrays and
never modify their arguments.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

Vector3 = NDArray[np.float64]
RotationMatrix = NDArray[np.float64]


def vector(x: float, y: float, z: float) -> Vector3:
    """Return a new Vector3."""
    return np.array([x, y, z], dtype=float)


def norm(v: Vector3) -> float:
    return float(np.linalg.norm(v))


def unit(v: Vector3) -> Vector3:
    """Return ``v`` scaled to unit length.

    Raises:
        ValueError: If ``v`` is the zero vector.
    """
    length = norm(v)
    if length == 0.0:
        raise ValueError('cannot normalize the zero vector')
    return np.asarray(v, dtype=float) / length


def cross(a: Vector3, b: Vector3) -> Vector3:
    return np.cross(a, b)


def dot(a: Vector3, b: Vector3) -> float:
    return float(np.dot(a, b))


def matrix_from_rows(row1: Vector3, row2: Vector3, row3: Vector3) -> RotationMatrix:
    """Stack three row vectors into a 3x3 matrix."""
    return np.vstack([row1, row2, row3]).astype(float)


def rotate(matrix: RotationMatrix, v: Vector3) -> Vector3:
    """Matrix-vector product ``matrix @ v``."""
    return matrix @ np.asarray(v, dtype=float)


def unrotate(matrix: RotationMatrix, v: Vector3) -> Vector3:
    """Apply the inverse of an orthonormal ``matrix`` (its transpose) to ``v``."""
    return matrix.T @ np.asarray(v, dtype=float)


def compose(outer: RotationMatrix, inner: RotationMatrix) -> RotationMatrix:
    """Rotation equivalent to applying ``inner`` then ``outer``."""
    return outer @ inner


def is_orthonormal(matrix: RotationMatrix, tolerance: float = 1e-12) -> bool:
    """True if ``matrix @ matrix.T`` is the identity within ``tolerance``."""
    return bool(np.allclose(matrix @ matrix.T, np.eye(3), atol=tolerance, rtol=0.0))
