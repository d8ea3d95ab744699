"""Adaptive infinite grid."""
from __future__ import annotations

import logging

from plane_viewer.geometry_core import Vec2
from plane_viewer.geometry.grid_lod import (
    determine_grid_line_rank,
    grid_cell_size,
    stroke_width_for_rank,
    zoom_level,
)
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.base_shape import PlaneShape
from plane_viewer.rendering.options import RANGE, OptionSpec
from plane_viewer.rendering.primitives import StrokePath

logger = logging.getLogger(__name__)


class InfiniteGrid(PlaneShape):
    """Grid lines at every multiple of a power-of-ten cell size.

    The cell size follows the zoom so on-screen cells stay between
    ``size / 10`` and ``size`` pixels, while the rank pattern (origin, every
    hundredth, every tenth line) repeats at every order of magnitude.
    """

    kind = "grid"
    specific_options = {
        "size": OptionSpec(
            RANGE, 100.0, "size", minimum=50.0, maximum=500.0, effect="reference cell size in pixels"
        ),
        "color": {"default": "#576f9b"},
        "name": {"default": "grid"},
    }

    @property
    def size(self) -> float:
        return float(self.options["size"])

    def cell_size(self, state: ViewportState) -> float:
        return grid_cell_size(zoom_level(state.world_to_screen.linear), self.size)

    def draw(self, state: ViewportState) -> list[StrokePath]:
        cell = self.cell_size(state)
        lattice = state.visible_world_bounds(0).scale(1 / cell).expanded_to_integer_bounds()
        min_x, max_x = int(lattice.min_x), int(lattice.max_x)
        min_y, max_y = int(lattice.min_y), int(lattice.max_y)
        logger.debug(
            "Grid %d: cell %.3g, lattice x %d..%d, y %d..%d",
            self.shape_id,
            cell,
            min_x,
            max_x,
            min_y,
            max_y,
        )

        paths: list[StrokePath] = []
        for x in range(min_x, max_x + 1):
            paths.append(
                self._grid_line(state, Vec2(x * cell, min_y * cell), Vec2(x * cell, max_y * cell), x)
            )
        for y in range(min_y, max_y + 1):
            paths.append(
                self._grid_line(state, Vec2(min_x * cell, y * cell), Vec2(max_x * cell, y * cell), y)
            )
        return paths

    def _grid_line(self, state: ViewportState, start: Vec2, end: Vec2, index: int) -> StrokePath:
        width = stroke_width_for_rank(self.stroke, determine_grid_line_rank(index))
        return self.stroke_path(
            [state.world_to_screen_point(start), state.world_to_screen_point(end)], width
        )
