from __future__ import annotations

import logging

from PyQt5 import QtCore, QtWidgets

from plane_viewer.core.config import ViewerConfig
from plane_viewer.rendering.base_shape import PlaneShape
from plane_viewer.rendering.scene import SHAPE_KINDS, Scene
from plane_viewer.ui.option_panel import ShapeOptionPanel
from plane_viewer.ui.plane_widget import PlaneWidget

logger = logging.getLogger(__name__)

NEW_SHAPE_ACTIONS = (
    ("New graph", "graph"),
    ("New grid", "grid"),
    ("New axes", "axes"),
    ("New transform", "transform"),
)


class PlaneViewerApp(QtWidgets.QApplication):
    def __init__(self, argv: list[str]) -> None:
        super().__init__(argv)
        self.setApplicationName("Plane Viewer")
        self.window: PlaneViewerWindow | None = None


class PlaneViewerWindow(QtWidgets.QMainWindow):
    def __init__(self, config: ViewerConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Plane Viewer")
        self._config = config or ViewerConfig()
        self._scene = Scene.default(self._config)
        self._canvas = PlaneWidget(self._scene, self._config, self)
        self._canvas.viewChanged.connect(self._update_status)

        self._panel_container = QtWidgets.QWidget()
        self._panel_layout = QtWidgets.QVBoxLayout(self._panel_container)
        self._panel_layout.addStretch(1)
        scroll = QtWidgets.QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._panel_container)
        scroll.setMinimumWidth(260)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        splitter.addWidget(scroll)
        splitter.addWidget(self._canvas)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        toolbar = self.addToolBar("Shapes")
        for label, kind in NEW_SHAPE_ACTIONS:
            action = toolbar.addAction(label)
            action.triggered.connect(lambda _checked=False, k=kind: self.add_shape(k))

        for shape in self._scene:
            self._add_panel(shape)
        self._update_status()

    @property
    def canvas(self) -> PlaneWidget:
        return self._canvas

    @property
    def scene(self) -> Scene:
        return self._scene

    def add_shape(self, kind: str) -> PlaneShape:
        if kind not in SHAPE_KINDS:
            raise ValueError(f"Unknown shape kind {kind!r}.")
        shape = self._scene.create(kind)
        self._add_panel(shape)
        self._canvas.update()
        logger.info("Added %s", shape)
        return shape

    def remove_shape(self, shape: PlaneShape) -> None:
        if not self._scene.remove(shape.shape_id):
            return
        for panel in self._panel_container.findChildren(ShapeOptionPanel):
            if panel.shape is shape:
                self._panel_layout.removeWidget(panel)
                panel.deleteLater()
        self._canvas.update()
        logger.info("Removed %s", shape)

    def _add_panel(self, shape: PlaneShape) -> None:
        panel = ShapeOptionPanel(shape, self.remove_shape)
        panel.optionChanged.connect(self._canvas.update)
        self._panel_layout.insertWidget(self._panel_layout.count() - 1, panel)

    def _update_status(self) -> None:
        controller = self._canvas.controller
        center = controller.get_world_center()
        self.statusBar().showMessage(
            f"center ({center.x:.4g}, {center.y:.4g})   zoom {controller.zoom_level():.4g} px/unit"
        )
