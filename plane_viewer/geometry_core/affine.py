"""Affine maps (linear part plus translation) used by the coordinate pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from plane_viewer.geometry_core.algebra import Matrix2, Vec2
from plane_viewer.geometry_core.errors import Result, SingularMatrixError

if TYPE_CHECKING:
    from plane_viewer.geometry_core.shapes import Rectangle


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class AffineTransform:
    linear: Matrix2 = field(default_factory=lambda: Matrix2.IDENTITY)
    translation: Vec2 = field(default_factory=lambda: Vec2.ZERO)

    IDENTITY: ClassVar["AffineTransform"]

    @classmethod
    def translation_by(cls, offset: Vec2) -> AffineTransform:
        return cls(Matrix2.IDENTITY, offset)

    @classmethod
    def rotation_about(cls, angle: float, center: Vec2 = Vec2.ZERO) -> AffineTransform:
        linear = Matrix2.rotation(angle)
        return cls(linear, center.subtract(linear.apply(center)))

    def apply(self, vector: Vec2) -> Vec2:
        return self.linear.apply(vector).add(self.translation)

    def __call__(self, vector: Vec2) -> Vec2:
        return self.apply(vector)

    def inverse(self) -> AffineTransform:
        inv_linear = self.linear.inverse()
        return AffineTransform(inv_linear, inv_linear.apply(self.translation).negate())

    def try_inverse(self) -> Result[AffineTransform]:
        try:
            return Result.success(self.inverse())
        except SingularMatrixError as exc:
            return Result.failure(exc)

    def compose(self, other: AffineTransform) -> AffineTransform:
        """Return ``self ∘ other``: ``other`` is applied first."""
        return AffineTransform(
            self.linear.multiply(other.linear),
            self.linear.apply(other.translation).add(self.translation),
        )

    def with_translation(self, translation: Vec2) -> AffineTransform:
        return AffineTransform(self.linear, translation)

    def clip(self, point: Vec2) -> Vec2:
        """Clamp ``point`` into the image of the unit square under this map.

        Raises :class:`SingularMatrixError` when the map collapses the square.
        """
        local = self.inverse().apply(point)
        return self.apply(Vec2(_clamp_unit(local.x), _clamp_unit(local.y)))

    def bounding_rectangle(self) -> "Rectangle":
        from plane_viewer.geometry_core.shapes import Rectangle

        return Rectangle.bounds(
            [
                self.translation,
                self.apply(Vec2.EX),
                self.apply(Vec2.EY),
                self.apply(Vec2(1.0, 1.0)),
            ]
        )


AffineTransform.IDENTITY = AffineTransform(Matrix2.IDENTITY, Vec2.ZERO)
