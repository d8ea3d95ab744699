from __future__ import annotations

import logging
from collections import deque
from typing import Callable

from plane_viewer.geometry_core import Matrix2, Polygon, Rectangle, Vec2
from plane_viewer.geometry.grid_lod import zoom_level
from plane_viewer.model.viewport_state import ViewIncrements, ViewportState
from plane_viewer.preview import transform as transitions
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

Operation = Callable[[ViewportState], transitions.Transition]
RedrawListener = Callable[[ViewportState], None]


class ViewportController:
    """Single owner of the world/screen state of one plane view.

    Input events are queued and processed to completion one at a time. An
    event submitted while another is being processed (for instance from a
    redraw listener) runs after the current one instead of nesting.
    """

    def __init__(
        self,
        state: ViewportState,
        increments: ViewIncrements | None = None,
    ) -> None:
        self._state = state
        self._increments = increments or ViewIncrements()
        self._pending: deque[Operation] = deque()
        self._processing = False
        self._listeners: list[RedrawListener] = []

    @classmethod
    def for_viewport(
        cls,
        width: float,
        height: float,
        *,
        initial_scale: float | None = None,
        increments: ViewIncrements | None = None,
    ) -> ViewportController:
        if initial_scale is None:
            state = ViewportState.initial(width, height)
        else:
            state = ViewportState.initial(width, height, initial_scale)
        return cls(state, increments)

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def increments(self) -> ViewIncrements:
        return self._increments

    def add_redraw_listener(self, listener: RedrawListener) -> None:
        self._listeners.append(listener)

    def remove_redraw_listener(self, listener: RedrawListener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Event processing
    # ------------------------------------------------------------------
    def dispatch(self, event: ViewportEvent) -> None:
        increments = self._increments
        self._submit(lambda state: transitions.apply_event(state, event, increments))

    def _submit(self, operation: Operation) -> transitions.Transition | None:
        self._pending.append(operation)
        if self._processing:
            return None

        last: transitions.Transition | None = None
        self._processing = True
        try:
            while self._pending:
                op = self._pending.popleft()
                last = op(self._state)
                self._state = last.state
                if last.redraw:
                    self._notify()
        finally:
            self._processing = False
            self._pending.clear()
        return last

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def on_pointer_down(self, position: Vec2) -> None:
        self.dispatch(PointerDown(position))

    def on_pointer_move(self, position: Vec2) -> None:
        self.dispatch(PointerMove(position))

    def on_pointer_up(self, position: Vec2 | None = None) -> None:
        self.dispatch(PointerUp(position))

    def on_pointer_leave(self) -> None:
        self.dispatch(PointerLeave())

    def on_wheel(self, position: Vec2, delta: float, *, rotate: bool = False) -> None:
        self.dispatch(Wheel(position, delta, rotate))

    def resize(self, width: float, height: float) -> None:
        self.dispatch(Resize(width, height))

    # ------------------------------------------------------------------
    # Direct commands
    # ------------------------------------------------------------------
    def pan(self, delta: Vec2) -> None:
        self._submit(lambda state: transitions.Transition(transitions.pan_state(state, delta), True))

    def apply_zoom(self, transform: Matrix2, fixed_point: Vec2) -> bool:
        """Compose ``transform`` onto the view around ``fixed_point``.

        Returns ``False`` when the update was rejected (state left unchanged)
        or deferred behind an event that is still being processed.
        """

        applied: list[bool] = []

        def operation(state: ViewportState) -> transitions.Transition:
            updated = transitions.zoom_state(state, transform, fixed_point)
            applied.append(updated is not None)
            if updated is None:
                logger.warning("Rejected zoom by %s around %s", transform, fixed_point)
                return transitions.Transition(state)
            return transitions.Transition(updated, redraw=True)

        self._submit(operation)
        return bool(applied) and applied[0]

    # ------------------------------------------------------------------
    # Coordinate queries
    # ------------------------------------------------------------------
    def world_to_screen(self, point: Vec2) -> Vec2:
        return self._state.world_to_screen_point(point)

    def screen_to_world(self, point: Vec2) -> Vec2:
        return self._state.screen_to_world_point(point)

    def get_viewport_rect(self, margin: float = 0.0) -> Rectangle:
        return self._state.viewport_rect(margin)

    def get_viewport_polygon(self, margin: float = 0.0) -> Polygon:
        return self._state.viewport_rect(margin).to_polygon()

    def get_visible_world_polygon(self, margin: float = 0.0) -> Polygon:
        return self._state.visible_world_polygon(margin)

    def get_visible_world_bounds(self, margin: float = 0.0) -> Rectangle:
        return self._state.visible_world_bounds(margin)

    def get_world_center(self) -> Vec2:
        return self._state.world_center()

    def zoom_level(self) -> float:
        return zoom_level(self._state.world_to_screen.linear)
