from __future__ import annotations

from PyQt5 import QtCore, QtGui, QtWidgets

from plane_viewer.core.config import ViewerConfig
from plane_viewer.geometry_core import Vec2
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.preview.viewport_controller import ViewportController
from plane_viewer.rendering.primitives import StrokePath
from plane_viewer.rendering.scene import Scene


def to_vec2(point: QtCore.QPoint | QtCore.QPointF) -> Vec2:
    return Vec2(float(point.x()), float(point.y()))


def wheel_delta(event: QtGui.QWheelEvent) -> int:
    """Scroll amount with negative meaning towards the user.

    Qt reports positive angleDelta when scrolling away from the user. Some
    platforms deliver Shift+wheel as horizontal scroll, so fall back to x.
    """
    angle = event.angleDelta()
    return -(angle.y() or angle.x())


def paint_stroke_paths(painter: QtGui.QPainter, paths: list[StrokePath]) -> None:
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    for path in paths:
        pen = QtGui.QPen(QtGui.QColor(path.color), path.width)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        pen.setJoinStyle(QtCore.Qt.RoundJoin)
        painter.setPen(pen)
        polyline = QtGui.QPolygonF([QtCore.QPointF(p.x, p.y) for p in path.points])
        painter.drawPolyline(polyline)


class PlaneWidget(QtWidgets.QWidget):
    """Canvas that paints a :class:`Scene` and feeds input to the controller.

    Shift + wheel rotates the view; the plain wheel zooms around the cursor.
    """

    viewChanged = QtCore.pyqtSignal()

    def __init__(
        self,
        scene: Scene,
        config: ViewerConfig | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config or ViewerConfig()
        self._scene = scene
        self.setMinimumSize(320, 240)
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)

        palette = self.palette()
        palette.setColor(QtGui.QPalette.Window, QtGui.QColor("#1e1f26"))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

        self._controller = ViewportController.for_viewport(
            self._config.width,
            self._config.height,
            initial_scale=self._config.initial_scale,
            increments=self._config.increments(),
        )
        self._controller.add_redraw_listener(self._on_view_changed)

    @property
    def controller(self) -> ViewportController:
        return self._controller

    @property
    def scene(self) -> Scene:
        return self._scene

    def sizeHint(self) -> QtCore.QSize:  # noqa: N802
        return QtCore.QSize(self._config.width, self._config.height)

    def _on_view_changed(self, _state: ViewportState) -> None:
        self.viewChanged.emit()
        self.update()

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: D401
        super().resizeEvent(event)
        size = event.size()
        self._controller.resize(size.width(), size.height())

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: D401
        _ = event
        painter = QtGui.QPainter(self)
        try:
            paint_stroke_paths(painter, self._scene.render(self._controller.state))
        finally:
            painter.end()

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        if event.button() == QtCore.Qt.LeftButton:
            self._controller.on_pointer_down(to_vec2(event.pos()))
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        self._controller.on_pointer_move(to_vec2(event.pos()))

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        if event.button() == QtCore.Qt.LeftButton:
            self._controller.on_pointer_up(to_vec2(event.pos()))
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event: QtCore.QEvent) -> None:  # noqa: D401
        self._controller.on_pointer_leave()
        super().leaveEvent(event)

    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:  # noqa: D401
        rotate = bool(event.modifiers() & QtCore.Qt.ShiftModifier)
        self._controller.on_wheel(to_vec2(event.position()), wheel_delta(event), rotate=rotate)
        event.accept()
