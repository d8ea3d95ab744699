"""2D vector and 2x2 matrix value types."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import ClassVar

from plane_viewer.geometry_core.errors import (
    DegenerateVectorError,
    Result,
    SingularMatrixError,
)

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    ZERO: ClassVar["Vec2"]
    EX: ClassVar["Vec2"]
    EY: ClassVar["Vec2"]

    def add(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def subtract(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def negate(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def scale(self, scalar: float) -> Vec2:
        return Vec2(scalar * self.x, scalar * self.y)

    def complex_multiply(self, other: Vec2) -> Vec2:
        """Multiply as complex numbers ``(x + iy)(x' + iy')``."""
        return Vec2(
            self.x * other.x - self.y * other.y,
            self.x * other.y + self.y * other.x,
        )

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def power(self, exponent: float) -> Vec2:
        """Complex exponentiation ``r**e * (cos(e*phi), sin(e*phi))``.

        The angle of the zero vector is undefined, so it maps to ``(1, 0)`` for
        a zero exponent and to the zero vector otherwise.
        """
        r = self.magnitude()
        if r < EPSILON:
            return Vec2(1.0, 0.0) if exponent == 0 else Vec2.ZERO
        modulus = r**exponent
        phi = self.angle()
        return Vec2(modulus * math.cos(exponent * phi), modulus * math.sin(exponent * phi))

    def normalized(self) -> Vec2:
        mag = self.magnitude()
        if mag < EPSILON:
            raise DegenerateVectorError(f"Cannot normalize zero-length vector {self}.")
        return self.scale(1.0 / mag)

    def try_normalized(self) -> Result[Vec2]:
        try:
            return Result.success(self.normalized())
        except DegenerateVectorError as exc:
            return Result.failure(exc)

    def distance_to(self, other: Vec2) -> float:
        return self.subtract(other).magnitude()

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: Vec2) -> Vec2:
        return self.add(other)

    def __sub__(self, other: Vec2) -> Vec2:
        return self.subtract(other)

    def __neg__(self) -> Vec2:
        return self.negate()

    def __mul__(self, scalar: float) -> Vec2:
        return self.scale(scalar)

    __rmul__ = __mul__


Vec2.ZERO = Vec2(0.0, 0.0)
Vec2.EX = Vec2(1.0, 0.0)
Vec2.EY = Vec2(0.0, 1.0)


@dataclass(frozen=True)
class Matrix2:
    """Row-major 2x2 matrix ``[[a, b], [c, d]]``."""

    a: float
    b: float
    c: float
    d: float

    IDENTITY: ClassVar["Matrix2"]

    @classmethod
    def from_columns(cls, first: Vec2, second: Vec2) -> Matrix2:
        return cls(first.x, second.x, first.y, second.y)

    @classmethod
    def from_rows(cls, first: Vec2, second: Vec2) -> Matrix2:
        return cls(first.x, first.y, second.x, second.y)

    @classmethod
    def rotation(cls, angle: float) -> Matrix2:
        cos = math.cos(angle)
        sin = math.sin(angle)
        return cls(cos, -sin, sin, cos)

    @classmethod
    def uniform_scale(cls, factor: float) -> Matrix2:
        return cls(factor, 0.0, 0.0, factor)

    def apply(self, vector: Vec2) -> Vec2:
        return Vec2(
            self.a * vector.x + self.b * vector.y,
            self.c * vector.x + self.d * vector.y,
        )

    def scale(self, scalar: float) -> Matrix2:
        return Matrix2(scalar * self.a, scalar * self.b, scalar * self.c, scalar * self.d)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> Matrix2:
        det = self.determinant()
        if abs(det) < EPSILON:
            raise SingularMatrixError(f"Matrix {self} is singular (det={det!r}).")
        return Matrix2(self.d, -self.b, -self.c, self.a).scale(1.0 / det)

    def try_inverse(self) -> Result[Matrix2]:
        try:
            return Result.success(self.inverse())
        except SingularMatrixError as exc:
            return Result.failure(exc)

    def multiply(self, other: Matrix2) -> Matrix2:
        return Matrix2(
            self.a * other.a + self.b * other.c,
            self.a * other.b + self.b * other.d,
            self.c * other.a + self.d * other.c,
            self.c * other.b + self.d * other.d,
        )

    def transpose(self) -> Matrix2:
        return Matrix2(self.a, self.c, self.b, self.d)

    def column(self, index: int) -> Vec2:
        if index == 0:
            return Vec2(self.a, self.c)
        if index == 1:
            return Vec2(self.b, self.d)
        raise IndexError(f"Column index {index} out of range for a 2x2 matrix.")

    def row(self, index: int) -> Vec2:
        if index == 0:
            return Vec2(self.a, self.b)
        if index == 1:
            return Vec2(self.c, self.d)
        raise IndexError(f"Row index {index} out of range for a 2x2 matrix.")

    def __matmul__(self, other: Matrix2) -> Matrix2:
        return self.multiply(other)


Matrix2.IDENTITY = Matrix2(1.0, 0.0, 0.0, 1.0)
