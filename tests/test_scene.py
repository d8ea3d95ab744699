import logging

import pytest

from plane_viewer.core.config import ViewerConfig
from plane_viewer.model.viewport_state import ViewportState
from plane_viewer.rendering.scene import SHAPE_KINDS, Scene


def test_default_scene_contents():
    scene = Scene.default()
    assert [shape.kind for shape in scene] == ["grid", "axes", "graph"]
    assert [shape.shape_id for shape in scene] == [0, 1, 2]
    assert sorted(SHAPE_KINDS) == ["axes", "graph", "grid", "transform"]


def test_create_passes_config_through():
    config = ViewerConfig(
        axes_margin=12.0,
        function_samples=40,
        transform_subdivisions=8,
        max_iterations=7,
        tolerance=1e-5,
    )
    scene = Scene(config)

    assert scene.create("axes").margin == 12.0
    assert scene.create("graph", {"function": "cos(x)"}).samples == 40
    transform = scene.create("transform")
    assert transform.subdivisions == 8
    assert transform.max_iterations == 7
    assert transform.tolerance == 1e-5


def test_create_unknown_kind_fails():
    with pytest.raises(ValueError, match="circle"):
        Scene().create("circle")


def test_ids_are_not_reused_after_removal():
    scene = Scene()
    first = scene.create("grid")
    assert scene.remove(first.shape_id) is True
    assert scene.remove(first.shape_id) is False
    assert scene.get(first.shape_id) is None

    second = scene.create("grid")
    assert second.shape_id == 1
    assert len(scene) == 1


def test_render_keeps_insertion_order():
    scene = Scene.default()
    commands = scene.render(ViewportState.initial(800, 600))
    ids = [command.shape_id for command in commands]
    assert ids == sorted(ids)
    assert set(ids) == {0, 1, 2}


def test_failing_shape_does_not_break_render(monkeypatch, caplog):
    scene = Scene.default()
    broken = scene.get(1)

    def explode(state):
        raise RuntimeError("boom")

    monkeypatch.setattr(broken, "draw", explode)
    with caplog.at_level(logging.ERROR):
        commands = scene.render(ViewportState.initial(800, 600))

    assert {command.shape_id for command in commands} == {0, 2}
    assert "Failed to render" in caplog.text
