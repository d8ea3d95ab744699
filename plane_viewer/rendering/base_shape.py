from __future__ import annotations

from typing import Any, ClassVar, Mapping

from plane_viewer.geometry_core import Path, Vec2
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.options import (
    GENERAL_OPTIONS,
    OptionOverride,
    OptionSpec,
    coerce_value,
    merge_defaults,
    resolve_schema,
)
from plane_viewer.rendering.primitives import StrokePath

# Errors a user-supplied callable may raise for a single sample.
EVALUATION_ERRORS = (ArithmeticError, ValueError, TypeError)


class PlaneShape:
    """A drawable element of the plane scene.

    Subclasses declare ``specific_options`` and implement :meth:`draw`, which
    turns the current viewport state into screen-space stroke commands.
    """

    kind: ClassVar[str] = "shape"
    specific_options: ClassVar[Mapping[str, OptionOverride]] = {}

    def __init__(self, shape_id: int, provided: Mapping[str, Any] | None = None) -> None:
        self.shape_id = shape_id
        self.options: dict[str, Any] = merge_defaults(self.schema(), provided)

    @classmethod
    def schema(cls) -> dict[str, OptionSpec]:
        return resolve_schema(GENERAL_OPTIONS, cls.specific_options)

    def set_option(self, name: str, raw: Any) -> None:
        schema = self.schema()
        if name not in schema:
            raise ValueError(f"{type(self).__name__} has no option {name!r}.")
        self.options[name] = coerce_value(name, schema[name], raw)
        self.options_changed(name)

    def options_changed(self, name: str) -> None:
        """Hook for subclasses caching values derived from options."""

    @property
    def name(self) -> str:
        return str(self.options["name"])

    @property
    def hidden(self) -> bool:
        return bool(self.options["hidden"])

    @property
    def color(self) -> str:
        return str(self.options["color"])

    @property
    def stroke(self) -> float:
        return float(self.options["stroke"])

    def render(self, state: ViewportState) -> list[StrokePath]:
        if self.hidden:
            return []
        return [path for path in self.draw(state) if path.is_drawable()]

    def draw(self, state: ViewportState) -> list[StrokePath]:
        raise NotImplementedError

    def stroke_path(self, points: Path | list[Vec2], width: float | None = None) -> StrokePath:
        return StrokePath.through(
            points, self.stroke if width is None else width, self.color, self.shape_id
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.shape_id}, name={self.name!r})"
