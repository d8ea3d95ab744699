"""Typed viewer settings loaded from settings.ini."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from plane_viewer.core.config_backend import ConfigBackend
from plane_viewer.geometry.numerical import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE
from plane_viewer.model.viewport_state import (
    DEFAULT_INITIAL_SCALE,
    DEFAULT_ZOOM_FACTOR,
    ViewIncrements,
)


@dataclass(frozen=True)
class ViewerConfig:
    width: int = 1000
    height: int = 700
    initial_scale: float = DEFAULT_INITIAL_SCALE
    zoom_factor: float = DEFAULT_ZOOM_FACTOR
    rotation_step_degrees: float = 11.25
    axes_margin: float = 30.0
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tolerance: float = DEFAULT_TOLERANCE
    function_samples: int = 300
    transform_subdivisions: int = 50

    def increments(self) -> ViewIncrements:
        return ViewIncrements.from_factors(
            self.zoom_factor, math.radians(self.rotation_step_degrees)
        )


# (section, option, parser, validity check, description)
_FIELDS: tuple[tuple[str, str, Callable[[str], object], Callable[[object], bool], str], ...] = (
    ("viewport", "width", int, lambda v: v > 0, "a positive integer"),
    ("viewport", "height", int, lambda v: v > 0, "a positive integer"),
    ("viewport", "initial_scale", float, lambda v: v > 0, "a positive number"),
    ("viewport", "zoom_factor", float, lambda v: v > 1, "a number above 1"),
    (
        "viewport",
        "rotation_step_degrees",
        float,
        lambda v: 0 < v < 180,
        "an angle between 0 and 180",
    ),
    ("viewport", "axes_margin", float, lambda v: v >= 0, "a non-negative number"),
    ("solver", "max_iterations", int, lambda v: v > 0, "a positive integer"),
    ("solver", "tolerance", float, lambda v: v > 0, "a positive number"),
    ("sampling", "function_samples", int, lambda v: v > 0, "a positive integer"),
    (
        "sampling",
        "transform_subdivisions",
        int,
        lambda v: v > 0,
        "a positive integer",
    ),
)


def config_from_sections(data: Mapping[str, Mapping[str, str]]) -> ViewerConfig:
    """Build a :class:`ViewerConfig`; missing options keep their defaults."""
    values: dict[str, object] = {}
    for section, option, parse, valid, description in _FIELDS:
        raw = data.get(section, {}).get(option)
        if raw is None or raw.strip() == "":
            continue
        try:
            value = parse(raw.strip())
        except ValueError as exc:
            raise ValueError(
                f"settings.ini [{section}] {option}={raw!r} is not {description}"
            ) from exc
        if not valid(value):
            raise ValueError(f"settings.ini [{section}] {option}={raw!r} is not {description}")
        values[option] = value
    return ViewerConfig(**values)  # type: ignore[arg-type]


def load_config(ini_path: Optional[str] = None) -> ViewerConfig:
    backend = ConfigBackend(ini_path)
    return config_from_sections(backend.load())
