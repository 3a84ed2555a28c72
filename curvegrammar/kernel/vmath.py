# curvegrammar/kernel/vmath.py
"""
VECTOR / MATRIX MATH: Affine Transforms for Grammar Expansion
=============================================================

PURPOSE:
--------
Pure math, no state. Every grammar transform ("rz 5 tx 0.1 sa 0.996") is
reduced to a single 4×4 affine matrix, and every emitted curve point is read
back out of an accumulated matrix.

CONVENTIONS:
------------
Matrices are plain numpy arrays (float64):

    Matrix4 : shape (4, 4)
    Matrix3 : shape (3, 3)

We use the COLUMN-VECTOR convention:

    p' = M @ p         (p is a homogeneous column [x, y, z, 1])

    M = [ R  t ]       R: 3×3 linear part (rotation / scale)
        [ 0  1 ]       t: translation column

So `compose(a, b) = a @ b` means "apply b first, then a". Composition is
associative but NOT commutative:

    translate(1, 0, 0) @ rotate_z(90°)  ≠  rotate_z(90°) @ translate(1, 0, 0)

Functions never modify their inputs; they always return new arrays.

Rotation angles are in RADIANS here. The transform mini-language works in
degrees and converts with `radians()` before calling into this module.
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """
    A direction in 3D space.

    Directions are transformed by the linear (upper-left 3×3) part of a
    matrix only; translation never affects them.

    Examples:
    ---------
    >>> Vector3(0.0, 0.0, 1.0).length()
    1.0
    >>> Vector3(0.0, 0.0, 0.0).is_zero()
    True
    """
    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, a) -> 'Vector3':
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def length(self) -> float:
        return math.sqrt(dot(self, self))

    def is_zero(self) -> bool:
        """True only for the exact vector (0, 0, 0)."""
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0


@dataclass(frozen=True)
class Point3:
    """
    A position in 3D space.

    Points are transformed by the full affine matrix (linear part AND
    translation). A Point3 is usually read from the translation column of
    an accumulated transform, see `get_translation`.
    """
    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, a) -> 'Point3':
        return cls(float(a[0]), float(a[1]), float(a[2]))


ORIGIN = Point3(0.0, 0.0, 0.0)
ZERO_VECTOR = Vector3(0.0, 0.0, 0.0)
UNIT_Z = Vector3(0.0, 0.0, 1.0)


def radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def dot(a: Vector3, b: Vector3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def add(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def sub(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


# =============================================================================
# 3×3 CONSTRUCTORS (linear part only)
# =============================================================================

def m3_scale(x: float, y: float, z: float) -> np.ndarray:
    return np.diag([float(x), float(y), float(z)])


def m3_rotate_x(angle: float) -> np.ndarray:
    """Counter-clockwise rotation about +X (right-hand rule), angle in radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0,   c,  -s],
        [0.0,   s,   c],
    ])


def m3_rotate_y(angle: float) -> np.ndarray:
    """Counter-clockwise rotation about +Y (right-hand rule), angle in radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [  c, 0.0,   s],
        [0.0, 1.0, 0.0],
        [ -s, 0.0,   c],
    ])


def m3_rotate_z(angle: float) -> np.ndarray:
    """Counter-clockwise rotation about +Z (right-hand rule), angle in radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [  c,  -s, 0.0],
        [  s,   c, 0.0],
        [0.0, 0.0, 1.0],
    ])


# =============================================================================
# 4×4 CONSTRUCTORS
# =============================================================================

def identity() -> np.ndarray:
    return np.eye(4)


def from_linear(m3: np.ndarray) -> np.ndarray:
    """Embed a 3×3 linear map in a 4×4 affine matrix (zero translation)."""
    m = np.eye(4)
    m[:3, :3] = m3
    return m


def scale(x: float, y: float, z: float) -> np.ndarray:
    return from_linear(m3_scale(x, y, z))


def translate(x: float, y: float, z: float) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = (x, y, z)
    return m


def rotate_x(angle: float) -> np.ndarray:
    return from_linear(m3_rotate_x(angle))


def rotate_y(angle: float) -> np.ndarray:
    return from_linear(m3_rotate_y(angle))


def rotate_z(angle: float) -> np.ndarray:
    return from_linear(m3_rotate_z(angle))


# =============================================================================
# COMPOSITION AND APPLICATION
# =============================================================================

def compose(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Return a @ b: the transform that applies `b` first, then `a`.
    """
    return a @ b


def get_translation(m: np.ndarray) -> Point3:
    """Read the translation column of a 4×4 matrix as a point."""
    return Point3.from_array(m[:3, 3])


def upper_left(m: np.ndarray) -> np.ndarray:
    """Return a copy of the 3×3 linear block of a 4×4 matrix."""
    return np.array(m[:3, :3])


def transform_point(m: np.ndarray, p: Point3) -> Point3:
    """Apply the full affine transform (linear part + translation) to a point."""
    return Point3.from_array(m[:3, :3] @ p.to_array() + m[:3, 3])


def transform_vector(m: np.ndarray, v: Vector3) -> Vector3:
    """
    Apply only the linear part of `m` to a direction.

    Accepts either a 4×4 affine matrix or a 3×3 linear matrix.
    """
    return Vector3.from_array(m[:3, :3] @ v.to_array())
