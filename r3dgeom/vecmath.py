"""Small immutable vector, quaternion and 4x4 matrix types."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

EPSILON = 1e-6


@dataclass(frozen=True, slots=True)
class Vec2:
    """A 2D vector, used for texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True, slots=True)
class Vec3:
    """A 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def minimum(self, other: Vec3) -> Vec3:
        """Component-wise minimum."""
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def maximum(self, other: Vec3) -> Vec3:
        """Component-wise maximum."""
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; a zero vector is returned unchanged."""
        length = self.length()
        if length == 0.0:
            return self
        return self * (1.0 / length)

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linear interpolation towards ``other``."""
        return self + (other - self) * t


@dataclass(frozen=True, slots=True)
class Vec4:
    """A 4D vector, used for colours and tangents."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w


@dataclass(frozen=True, slots=True)
class Quat:
    """A rotation quaternion with the scalar part in ``w``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __add__(self, other: Quat) -> Quat:
        return Quat(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __mul__(self, scalar: float) -> Quat:
        return Quat(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Quat:
        return Quat(-self.x, -self.y, -self.z, -self.w)

    def dot(self, other: Quat) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Quat:
        length = self.length() or 1.0
        return self * (1.0 / length)

    def to_matrix(self) -> Matrix:
        """Rotation matrix for this quaternion."""
        a2, b2, c2 = self.x * self.x, self.y * self.y, self.z * self.z
        ab, ac, bc = self.x * self.y, self.x * self.z, self.y * self.z
        ad, bd, cd = self.w * self.x, self.w * self.y, self.w * self.z
        return Matrix((
            (1.0 - 2.0 * (b2 + c2), 2.0 * (ab - cd), 2.0 * (ac + bd), 0.0),
            (2.0 * (ab + cd), 1.0 - 2.0 * (a2 + c2), 2.0 * (bc - ad), 0.0),
            (2.0 * (ac - bd), 2.0 * (bc + ad), 1.0 - 2.0 * (a2 + b2), 0.0),
            (0.0, 0.0, 0.0, 1.0),
        ))


def slerp(q1: Quat, q2: Quat, t: float) -> Quat:
    """Spherical linear interpolation along the shortest arc."""
    cos_half = q1.dot(q2)
    if cos_half < 0.0:
        q2 = -q2
        cos_half = -cos_half

    if abs(cos_half) >= 1.0:
        return q1
    if cos_half > 0.95:
        return (q1 + (q2 + -q1) * t).normalized()

    half_theta = math.acos(cos_half)
    sin_half = math.sqrt(1.0 - cos_half * cos_half)
    if abs(sin_half) < EPSILON:
        return q1 * 0.5 + q2 * 0.5

    ratio_a = math.sin((1.0 - t) * half_theta) / sin_half
    ratio_b = math.sin(t * half_theta) / sin_half
    return q1 * ratio_a + q2 * ratio_b


Row = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class Matrix:
    """A 4x4 transform stored as rows; points are column vectors."""

    rows: tuple[Row, Row, Row, Row]

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.rows)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("a matrix needs exactly 4 rows of 4 values")
        object.__setattr__(self, "rows", rows)

    def __getitem__(self, row: int) -> Row:
        return self.rows[row]

    def multiply(self, other: Matrix) -> Matrix:
        """Compose two transforms: the result applies ``self`` first, then ``other``."""
        columns = list(zip(*self.rows))
        return Matrix(tuple(
            tuple(sum(a * b for a, b in zip(row, column)) for column in columns)
            for row in other.rows
        ))

    def is_identity(self) -> bool:
        return self.rows == _IDENTITY_ROWS

    def transform_point(self, point: Vec3) -> Vec3:
        """Apply the transform to a point (w = 1)."""
        x, y, z = (
            row[0] * point.x + row[1] * point.y + row[2] * point.z + row[3]
            for row in self.rows[:3]
        )
        return Vec3(x, y, z)


_IDENTITY_ROWS = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


def identity_matrix() -> Matrix:
    return Matrix(_IDENTITY_ROWS)


def scale_matrix(x: float, y: float, z: float) -> Matrix:
    return Matrix((
        (x, 0.0, 0.0, 0.0),
        (0.0, y, 0.0, 0.0),
        (0.0, 0.0, z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    ))


def translate_matrix(x: float, y: float, z: float) -> Matrix:
    return Matrix((
        (1.0, 0.0, 0.0, x),
        (0.0, 1.0, 0.0, y),
        (0.0, 0.0, 1.0, z),
        (0.0, 0.0, 0.0, 1.0),
    ))