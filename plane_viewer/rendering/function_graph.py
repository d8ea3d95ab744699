"""Graph of ``y = f(x)`` sampled across the visible x range."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import numpy as np

from plane_viewer.geometry_core import Vec2
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.base_shape import EVALUATION_ERRORS, PlaneShape
from plane_viewer.rendering.options import TEXT, OptionSpec
from plane_viewer.rendering.primitives import StrokePath
from plane_viewer.services.expression_service import compile_function_or

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_COUNT = 300


def sample_function(
    func: Callable[[float], float], min_x: float, max_x: float, samples: int
) -> list[list[Vec2]]:
    """Sample ``func`` on ``samples`` equal steps, split into plottable runs.

    A sample that raises or is not finite is dropped and ends the current run,
    so a pole or a gap in the domain does not draw a spurious connecting line.
    """
    runs: list[list[Vec2]] = []
    current: list[Vec2] = []
    for x in np.linspace(min_x, max_x, samples + 1):
        try:
            y = func(float(x))
        except EVALUATION_ERRORS:
            y = float("nan")
        if not np.isfinite(y):
            if current:
                runs.append(current)
            current = []
            continue
        current.append(Vec2(float(x), float(y)))
    if current:
        runs.append(current)
    return runs


class FunctionGraph(PlaneShape):
    kind = "graph"
    specific_options = {
        "function": OptionSpec(TEXT, "sin(x)", "y", effect="expression in x"),
        "name": {"default": "function"},
        "color": {"default": "#91678b"},
    }

    def __init__(
        self,
        shape_id: int,
        provided: Mapping[str, Any] | None = None,
        *,
        samples: int = DEFAULT_SAMPLE_COUNT,
    ) -> None:
        super().__init__(shape_id, provided)
        self.samples = samples
        self._compiled: Callable[[float], float] | None = None

    @property
    def expression(self) -> str:
        return str(self.options["function"])

    def options_changed(self, name: str) -> None:
        if name == "function":
            self._compiled = None

    def function(self) -> Callable[[float], float]:
        if self._compiled is None:
            self._compiled = compile_function_or(self.expression)
        return self._compiled

    def draw(self, state: ViewportState) -> list[StrokePath]:
        visible = state.visible_world_bounds(0)
        runs = sample_function(self.function(), visible.min_x, visible.max_x, self.samples)
        return [
            self.stroke_path([state.world_to_screen_point(p) for p in run]) for run in runs
        ]
