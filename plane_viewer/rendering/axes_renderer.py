"""Coordinate axes with arrow heads, kept inside the viewport."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from plane_viewer.geometry_core import GeometryError, Line, Polygon, Vec2
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.base_shape import PlaneShape
from plane_viewer.rendering.primitives import StrokePath

logger = logging.getLogger(__name__)

DEFAULT_AXES_MARGIN = 30.0
ARROW_LEFT = Vec2(-20.0, 10.0)
ARROW_RIGHT = Vec2(-20.0, -10.0)


class Axes(PlaneShape):
    kind = "axes"
    specific_options = {
        "name": {"default": "axes"},
        "color": {"default": "#65c9b8"},
        "stroke": {"default": 3.0},
    }

    def __init__(
        self,
        shape_id: int,
        provided: Mapping[str, Any] | None = None,
        *,
        margin: float = DEFAULT_AXES_MARGIN,
    ) -> None:
        super().__init__(shape_id, provided)
        self.margin = margin

    def visible_origin(self, state: ViewportState) -> Vec2:
        """World origin, clamped into the viewport shrunk by the margin.

        The clamp happens in the oriented unit-square frame of the visible
        region, so it also holds for rotated views.
        """
        region = state.screen_to_world_transform().compose(
            state.viewport_rect(self.margin + 0.1).to_affine_transform()
        )
        return region.clip(Vec2.ZERO)

    def draw(self, state: ViewportState) -> list[StrokePath]:
        try:
            origin = self.visible_origin(state)
        except GeometryError as exc:
            logger.debug("Axes %d skipped: %s", self.shape_id, exc)
            return []

        area = state.visible_world_polygon(self.margin)
        paths: list[StrokePath] = []
        for direction in (Vec2.EX, Vec2.EY):
            paths.extend(self._axis(state, origin, direction, area))
        return paths

    def _axis(
        self, state: ViewportState, origin: Vec2, direction: Vec2, area: Polygon
    ) -> list[StrokePath]:
        hits = area.intersect_line(Line(origin, direction))
        if len(hits) < 2:
            return []
        start = state.world_to_screen_point(hits[0])
        end = state.world_to_screen_point(hits[-1])
        heading = end.subtract(start).try_normalized()
        if not heading.ok:
            logger.debug("Axis %s collapsed to a point", direction)
            return []
        unit = heading.unwrap()
        left = end.add(unit.complex_multiply(ARROW_LEFT))
        right = end.add(unit.complex_multiply(ARROW_RIGHT))
        return [self.stroke_path([start, end]), self.stroke_path([left, end, right])]
