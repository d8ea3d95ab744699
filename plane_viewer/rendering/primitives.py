"""Toolkit-independent draw commands produced by the shape renderers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from plane_viewer.geometry_core import Vec2


@dataclass(frozen=True)
class StrokePath:
    """Open polyline in screen coordinates."""

    points: tuple[Vec2, ...]
    width: float
    color: str
    shape_id: int | None = None

    @classmethod
    def through(
        cls, points: Iterable[Vec2], width: float, color: str, shape_id: int | None = None
    ) -> StrokePath:
        return cls(tuple(points), float(width), color, shape_id)

    def is_drawable(self) -> bool:
        return len(self.points) >= 2
