"""Pan, zoom and pointer transitions for the plane viewport.

Every function here is pure: it takes the current :class:`ViewportState` and
returns the next one (wrapped in a :class:`Transition` for event handlers).
Nothing is mutated in place.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from plane_viewer.geometry_core import AffineTransform, Matrix2, SingularMatrixError, Vec2
from plane_viewer.geometry_core.algebra import EPSILON
from plane_viewer.model.viewport_state import ViewIncrements, ViewportState
from plane_viewer.preview.events import (
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    Resize,
    ViewportEvent,
    Wheel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    state: ViewportState
    redraw: bool = False


def pan_state(state: ViewportState, delta: Vec2) -> ViewportState:
    """Shift the view by a screen-space ``delta``."""
    transform = state.world_to_screen
    return state.with_transform(transform.with_translation(transform.translation.add(delta)))


def zoom_state(
    state: ViewportState, transform: Matrix2, fixed_point: Vec2
) -> ViewportState | None:
    """Compose ``transform`` onto the view keeping ``fixed_point`` under the same pixel.

    Returns ``None`` when ``transform`` cannot be inverted or the update would
    leave a singular view transform.
    """
    if not transform.try_inverse().ok:
        return None
    current = state.world_to_screen
    new_linear = current.linear.multiply(transform)
    if abs(new_linear.determinant()) < EPSILON:
        return None

    fixed_screen = current.apply(fixed_point)
    moved_screen = new_linear.apply(fixed_point).add(current.translation)
    offset = fixed_screen.subtract(moved_screen)
    return state.with_transform(
        AffineTransform(new_linear, current.translation.add(offset))
    )


def resize_state(state: ViewportState, width: float, height: float) -> ViewportState:
    """Resize the viewport keeping the world point at its center in place."""
    new_size = Vec2(float(width), float(height))
    shift = new_size.subtract(state.viewport_size).scale(0.5)
    moved = pan_state(state, shift)
    return replace(moved, viewport_size=new_size)


def on_pointer_down(state: ViewportState, event: PointerDown) -> Transition:
    return Transition(replace(state, dragging=True, last_pointer=event.position))


def on_pointer_move(state: ViewportState, event: PointerMove) -> Transition:
    if not state.dragging or state.last_pointer is None:
        return Transition(state)
    delta = event.position.subtract(state.last_pointer)
    moved = pan_state(state, delta)
    return Transition(replace(moved, last_pointer=event.position), redraw=True)


def on_pointer_release(state: ViewportState, _event: PointerUp | PointerLeave) -> Transition:
    if not state.dragging:
        return Transition(state)
    return Transition(replace(state, dragging=False, last_pointer=None))


def on_wheel(state: ViewportState, event: Wheel, increments: ViewIncrements) -> Transition:
    if event.delta == 0:
        return Transition(state)

    step = increments.rotation if event.rotate else increments.zoom
    if event.delta > 0:
        inverse = step.try_inverse()
        if not inverse.ok:
            logger.warning("Rejected view update: %s", inverse.error)
            return Transition(state)
        step = inverse.unwrap()

    try:
        fixed_point = state.screen_to_world_point(event.position)
    except SingularMatrixError:
        logger.warning("Rejected view update: current view transform is singular")
        return Transition(state)

    updated = zoom_state(state, step, fixed_point)
    if updated is None:
        logger.warning("Rejected view update: resulting view transform would be singular")
        return Transition(state)
    return Transition(updated, redraw=True)


def on_resize(state: ViewportState, event: Resize) -> Transition:
    return Transition(resize_state(state, event.width, event.height), redraw=True)


def apply_event(
    state: ViewportState, event: ViewportEvent, increments: ViewIncrements
) -> Transition:
    """Dispatch ``event`` to its transition function."""
    if isinstance(event, PointerDown):
        return on_pointer_down(state, event)
    if isinstance(event, PointerMove):
        return on_pointer_move(state, event)
    if isinstance(event, (PointerUp, PointerLeave)):
        return on_pointer_release(state, event)
    if isinstance(event, Wheel):
        return on_wheel(state, event, increments)
    if isinstance(event, Resize):
        return on_resize(state, event)
    raise TypeError(f"Unsupported viewport event: {event!r}")
