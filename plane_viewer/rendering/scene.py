"""Ordered collection of plane shapes rendered on every pass."""
from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from plane_viewer.core.config import ViewerConfig
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.axes_renderer import Axes
from plane_viewer.rendering.base_shape import PlaneShape
from plane_viewer.rendering.function_graph import FunctionGraph
from plane_viewer.rendering.grid_renderer import InfiniteGrid
from plane_viewer.rendering.primitives import StrokePath
from plane_viewer.rendering.transform_renderer import Transformation

logger = logging.getLogger(__name__)

SHAPE_KINDS: dict[str, type[PlaneShape]] = {
    InfiniteGrid.kind: InfiniteGrid,
    Axes.kind: Axes,
    FunctionGraph.kind: FunctionGraph,
    Transformation.kind: Transformation,
}


class Scene:
    def __init__(self, config: ViewerConfig | None = None) -> None:
        self._config = config or ViewerConfig()
        self._shapes: list[PlaneShape] = []
        self._next_id = 0

    @classmethod
    def default(cls, config: ViewerConfig | None = None) -> Scene:
        """Grid, axes and one function graph."""
        scene = cls(config)
        scene.create(InfiniteGrid.kind)
        scene.create(Axes.kind)
        scene.create(FunctionGraph.kind)
        return scene

    def __iter__(self) -> Iterator[PlaneShape]:
        return iter(list(self._shapes))

    def __len__(self) -> int:
        return len(self._shapes)

    def create(self, kind: str, provided: Mapping[str, Any] | None = None) -> PlaneShape:
        shape_cls = SHAPE_KINDS.get(kind)
        if shape_cls is None:
            raise ValueError(f"Unknown shape kind {kind!r}; expected one of {sorted(SHAPE_KINDS)}.")
        shape_id = self._next_id
        config = self._config
        if shape_cls is Axes:
            shape: PlaneShape = Axes(shape_id, provided, margin=config.axes_margin)
        elif shape_cls is FunctionGraph:
            shape = FunctionGraph(shape_id, provided, samples=config.function_samples)
        elif shape_cls is Transformation:
            shape = Transformation(
                shape_id,
                provided,
                subdivisions=config.transform_subdivisions,
                max_iterations=config.max_iterations,
                tolerance=config.tolerance,
            )
        else:
            shape = shape_cls(shape_id, provided)
        self._next_id += 1
        self._shapes.append(shape)
        logger.debug("Added %r", shape)
        return shape

    def remove(self, shape_id: int) -> bool:
        shape = self.get(shape_id)
        if shape is None:
            return False
        self._shapes.remove(shape)
        logger.debug("Removed %r", shape)
        return True

    def get(self, shape_id: int) -> PlaneShape | None:
        for shape in self._shapes:
            if shape.shape_id == shape_id:
                return shape
        return None

    def render(self, state: ViewportState) -> list[StrokePath]:
        """Draw commands of every visible shape, in insertion order.

        A shape that fails is logged and left out; the rest of the pass goes on.
        """
        commands: list[StrokePath] = []
        for shape in list(self._shapes):
            try:
                commands.extend(shape.render(state))
            except Exception:
                logger.exception("Failed to render %r", shape)
        return commands
