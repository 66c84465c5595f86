"""Tests for Vector3 and RotationMatrix helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from planisphere_tools.vectors import (
    compose,
    cross,
    dot,
    is_orthonormal,
    matrix_from_rows,
    norm,
    rotate,
    unit,
    unrotate,
    vector,
)


def _rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return matrix_from_rows(vector(c, s, 0.0), vector(-s, c, 0.0), vector(0.0, 0.0, 1.0))


def test_basic_products() -> None:
    """Cross and dot products of the basis vectors."""
    x, y = vector(1.0, 0.0, 0.0), vector(0.0, 1.0, 0.0)
    assert np.allclose(cross(x, y), vector(0.0, 0.0, 1.0))
    assert dot(x, y) == 0.0
    assert norm(vector(3.0, 4.0, 0.0)) == pytest.approx(5.0)


def test_unit_rejects_zero() -> None:
    """The zero vector has no direction."""
    assert np.allclose(unit(vector(0.0, 0.0, 2.0)), vector(0.0, 0.0, 1.0))
    with pytest.raises(ValueError):
        unit(vector(0.0, 0.0, 0.0))


def test_rotate_and_unrotate() -> None:
    """Unrotate inverts rotate for orthonormal matrices."""
    matrix = _rotation_z(0.3)
    v = vector(0.2, -0.7, 0.4)
    assert is_orthonormal(matrix)
    assert np.allclose(unrotate(matrix, rotate(matrix, v)), v, atol=1e-15)


def test_compose_adds_angles() -> None:
    """Two rotations about the same axis compose by adding angles."""
    assert np.allclose(compose(_rotation_z(0.1), _rotation_z(0.2)), _rotation_z(0.3))


def test_functions_do_not_mutate_arguments() -> None:
    """Inputs are left untouched."""
    v = vector(1.0, 2.0, 2.0)
    unit(v)
    rotate(_rotation_z(1.0), v)
    assert np.array_equal(v, vector(1.0, 2.0, 2.0))
