"""Immutable world/screen state of a plane viewport.

The state is owned by :class:`plane_viewer.preview.viewport_controller.ViewportController`
and replaced wholesale on every processed input event. It holds no rendering
or IO logic, only the fields and the coordinate queries derived from them.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace

from plane_viewer.geometry_core import AffineTransform, Matrix2, Polygon, Rectangle, Vec2

DEFAULT_INITIAL_SCALE = 50.0
DEFAULT_ZOOM_FACTOR = 1.3
DEFAULT_ROTATION_STEP = math.pi / 16


@dataclass(frozen=True)
class ViewIncrements:
    """Per wheel-tick zoom and rotation matrices."""

    zoom: Matrix2 = Matrix2.uniform_scale(DEFAULT_ZOOM_FACTOR)
    rotation: Matrix2 = Matrix2.rotation(DEFAULT_ROTATION_STEP)

    @classmethod
    def from_factors(cls, zoom_factor: float, rotation_step: float) -> ViewIncrements:
        return cls(
            zoom=Matrix2.uniform_scale(zoom_factor),
            rotation=Matrix2.rotation(rotation_step),
        )


@dataclass(frozen=True)
class ViewportState:
    world_to_screen: AffineTransform
    viewport_size: Vec2
    dragging: bool = False
    last_pointer: Vec2 | None = None

    @classmethod
    def initial(
        cls, width: float, height: float, scale: float = DEFAULT_INITIAL_SCALE
    ) -> ViewportState:
        """World origin at the viewport center, y axis pointing up."""
        size = Vec2(float(width), float(height))
        return cls(
            world_to_screen=AffineTransform(Matrix2(scale, 0.0, 0.0, -scale), size.scale(0.5)),
            viewport_size=size,
        )

    @property
    def is_idle(self) -> bool:
        return not self.dragging

    def with_transform(self, transform: AffineTransform) -> ViewportState:
        return replace(self, world_to_screen=transform)

    def screen_to_world_transform(self) -> AffineTransform:
        return self.world_to_screen.inverse()

    def world_to_screen_point(self, point: Vec2) -> Vec2:
        return self.world_to_screen.apply(point)

    def screen_to_world_point(self, point: Vec2) -> Vec2:
        return self.screen_to_world_transform().apply(point)

    def viewport_rect(self, margin: float = 0.0) -> Rectangle:
        return Rectangle(0.0, 0.0, self.viewport_size.x, self.viewport_size.y).shrink(margin)

    def visible_world_polygon(self, margin: float = 0.0) -> Polygon:
        return self.viewport_rect(margin).to_polygon().transform(self.screen_to_world_transform())

    def visible_world_bounds(self, margin: float = 0.0) -> Rectangle:
        return self.visible_world_polygon(margin).bounding_rectangle()

    def world_center(self) -> Vec2:
        return self.screen_to_world_point(self.viewport_rect().center)
