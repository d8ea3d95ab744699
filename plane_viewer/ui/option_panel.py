"""Option editors generated from a shape's declarative schema."""
from __future__ import annotations

import logging
from typing import Callable

from PyQt5 import QtCore, QtGui, QtWidgets

from plane_viewer.rendering.base_shape import PlaneShape
from plane_viewer.rendering.options import BUTTON, CHECKBOX, COLOR, RANGE, OptionSpec

logger = logging.getLogger(__name__)

RANGE_SLIDER_STEPS = 100


class ShapeOptionPanel(QtWidgets.QGroupBox):
    """One group box per shape with an editor row per option."""

    optionChanged = QtCore.pyqtSignal()

    def __init__(
        self,
        shape: PlaneShape,
        on_delete: Callable[[PlaneShape], None],
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(shape.name, parent)
        self._shape = shape
        self._on_delete = on_delete
        layout = QtWidgets.QFormLayout(self)
        for name, spec in shape.schema().items():
            editor = self._build_editor(name, spec)
            if spec.kind == BUTTON:
                layout.addRow(editor)
            else:
                layout.addRow(f"{spec.label or name}:", editor)

    @property
    def shape(self) -> PlaneShape:
        return self._shape

    def _build_editor(self, name: str, spec: OptionSpec) -> QtWidgets.QWidget:
        value = self._shape.options.get(name)
        if spec.kind == BUTTON:
            button = QtWidgets.QPushButton(spec.label or name)
            button.clicked.connect(lambda: self._on_delete(self._shape))
            return button
        if spec.kind == CHECKBOX:
            box = QtWidgets.QCheckBox()
            box.setChecked(bool(value))
            box.toggled.connect(lambda checked, n=name: self._apply(n, checked))
            return box
        if spec.kind == RANGE:
            return self._build_slider(name, spec, float(value))
        if spec.kind == COLOR:
            button = QtWidgets.QPushButton(str(value))
            button.clicked.connect(lambda: self._pick_color(name, button))
            return button
        line_edit = QtWidgets.QLineEdit(str(value))
        line_edit.editingFinished.connect(lambda n=name, w=line_edit: self._apply(n, w.text()))
        return line_edit

    def _build_slider(self, name: str, spec: OptionSpec, value: float) -> QtWidgets.QSlider:
        minimum = spec.minimum if spec.minimum is not None else 0.0
        maximum = spec.maximum if spec.maximum is not None else max(value, 1.0)
        span = maximum - minimum or 1.0
        slider = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        slider.setRange(0, RANGE_SLIDER_STEPS)
        slider.setValue(round((value - minimum) / span * RANGE_SLIDER_STEPS))
        slider.valueChanged.connect(
            lambda pos, n=name: self._apply(n, minimum + span * pos / RANGE_SLIDER_STEPS)
        )
        return slider

    def _pick_color(self, name: str, button: QtWidgets.QPushButton) -> None:
        color = QtWidgets.QColorDialog.getColor(QtGui.QColor(button.text()), self)
        if not color.isValid():
            return
        button.setText(color.name())
        self._apply(name, color.name())

    def _apply(self, name: str, raw: object) -> None:
        try:
            self._shape.set_option(name, raw)
        except ValueError:
            logger.warning("Invalid value %r for option %s", raw, name, exc_info=True)
            return
        if name == "name":
            self.setTitle(self._shape.name)
        self.optionChanged.emit()
