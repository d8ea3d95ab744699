"""Image of the coordinate lattice under a nonlinear plane map.

The lattice is chosen in the pre-image of the visible region so that mapped
cells appear at a roughly constant on-screen size near the view center.
Pre-images come from the best-effort Newton inverse; a lattice line whose
construction fails is skipped on its own.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping

from plane_viewer.geometry_core import Line, LineSegment, Polygon, Vec2
from plane_viewer.geometry.grid_lod import (
    determine_grid_line_rank,
    grid_cell_size,
    stroke_width_for_rank,
    zoom_level,
)
from plane_viewer.geometry.numerical import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    PlaneMap,
    inverse_2d,
    jacobian,
)
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.base_shape import EVALUATION_ERRORS, PlaneShape
from plane_viewer.rendering.options import RANGE, TEXT, OptionSpec
from plane_viewer.rendering.primitives import StrokePath
from plane_viewer.services.expression_service import ExpressionError, compile_map

logger = logging.getLogger(__name__)

DEFAULT_SUBDIVISIONS = 50
MAX_LATTICE_LINES = 400


class Transformation(PlaneShape):
    kind = "transform"
    specific_options = {
        "x_func": OptionSpec(TEXT, "x*x-y*y", "x", effect="x component of the map"),
        "y_func": OptionSpec(TEXT, "2*x*y", "y", effect="y component of the map"),
        "size": OptionSpec(
            RANGE, 300.0, "size", minimum=50.0, maximum=500.0, effect="reference cell size in pixels"
        ),
        "color": {"default": "#ff0088"},
        "name": {"default": "transform"},
    }

    def __init__(
        self,
        shape_id: int,
        provided: Mapping[str, Any] | None = None,
        *,
        subdivisions: int = DEFAULT_SUBDIVISIONS,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        super().__init__(shape_id, provided)
        self.subdivisions = subdivisions
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self._compiled: PlaneMap | None = None

    @property
    def size(self) -> float:
        return float(self.options["size"])

    def options_changed(self, name: str) -> None:
        if name in ("x_func", "y_func"):
            self._compiled = None

    def plane_map(self) -> PlaneMap:
        if self._compiled is None:
            self._compiled = compile_map(self.options["x_func"], self.options["y_func"])
        return self._compiled

    def _inverse(self, forward: PlaneMap) -> PlaneMap:
        return inverse_2d(
            forward, max_iterations=self.max_iterations, tolerance=self.tolerance
        )

    def cell_size(self, state: ViewportState, forward: PlaneMap) -> float:
        """Lattice spacing from the local scale of ``forward`` at the view center."""
        view_det = state.world_to_screen.linear.determinant()
        local_zoom = 0.0
        try:
            center = self._inverse(forward)(state.world_center())
            local_zoom = math.sqrt(abs(jacobian(forward)(center).determinant() * view_det))
        except EVALUATION_ERRORS as exc:
            logger.debug("Transform %d: local scale unavailable: %s", self.shape_id, exc)
        if not math.isfinite(local_zoom) or local_zoom <= 0:
            local_zoom = zoom_level(state.world_to_screen.linear)
        return grid_cell_size(local_zoom, self.size)

    def preimage_region(self, state: ViewportState, forward: PlaneMap) -> Polygon:
        inverse = self._inverse(forward)
        vertices: list[Vec2] = []
        for vertex in state.visible_world_polygon(0).subdivide(self.subdivisions):
            try:
                preimage = inverse(vertex)
            except EVALUATION_ERRORS:
                continue
            if preimage.is_finite():
                vertices.append(preimage)
        return Polygon(vertices)

    def draw(self, state: ViewportState) -> list[StrokePath]:
        try:
            forward = self.plane_map()
        except ExpressionError as exc:
            logger.info("Transform %d not drawn: %s", self.shape_id, exc)
            return []

        region = self.preimage_region(state, forward)
        if len(region) < 3:
            return []
        cell = self.cell_size(state, forward)
        lattice = region.bounding_rectangle().scale(1 / cell).expanded_to_integer_bounds()
        if lattice.width > MAX_LATTICE_LINES or lattice.height > MAX_LATTICE_LINES:
            logger.debug(
                "Transform %d: lattice %gx%g too large, skipped",
                self.shape_id,
                lattice.width,
                lattice.height,
            )
            return []

        paths: list[StrokePath] = []
        for index in range(int(lattice.min_x), int(lattice.max_x) + 1):
            line = Line(Vec2.EX.scale(index * cell), Vec2.EY)
            path = self._mapped_line(state, forward, region, line, index)
            if path is not None:
                paths.append(path)
        for index in range(int(lattice.min_y), int(lattice.max_y) + 1):
            line = Line(Vec2.EY.scale(index * cell), Vec2.EX)
            path = self._mapped_line(state, forward, region, line, index)
            if path is not None:
                paths.append(path)
        return paths

    def _mapped_line(
        self,
        state: ViewportState,
        forward: Callable[[Vec2], Vec2],
        region: Polygon,
        line: Line,
        index: int,
    ) -> StrokePath | None:
        hits = region.intersect_line(line)
        if not hits:
            return None
        segment = LineSegment(hits[0], hits[-1]).to_path().subdivide(self.subdivisions)
        try:
            screen = segment.map(forward).map(state.world_to_screen_point)
        except EVALUATION_ERRORS as exc:
            logger.debug("Transform %d: lattice line %d skipped: %s", self.shape_id, index, exc)
            return None
        if not all(p.is_finite() for p in screen):
            return None
        width = stroke_width_for_rank(self.stroke, determine_grid_line_rank(index))
        return self.stroke_path(list(screen), width)
