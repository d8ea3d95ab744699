"""Toolkit-independent input events consumed by the viewport controller."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from plane_viewer.geometry_core import Vec2


@dataclass(frozen=True)
class PointerDown:
    position: Vec2


@dataclass(frozen=True)
class PointerMove:
    position: Vec2


@dataclass(frozen=True)
class PointerUp:
    position: Vec2 | None = None


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class Wheel:
    """A scroll tick; negative ``delta`` zooms in / rotates forward."""

    position: Vec2
    delta: float
    rotate: bool = False


@dataclass(frozen=True)
class Resize:
    width: float
    height: float


ViewportEvent = Union[PointerDown, PointerMove, PointerUp, PointerLeave, Wheel, Resize]
