import pytest

from plane_viewer.rendering.options import (
    BUTTON,
    CHECKBOX,
    GENERAL_OPTIONS,
    RANGE,
    TEXT,
    OptionSpec,
    coerce_value,
    merge_defaults,
    resolve_schema,
)


def test_option_spec_rejects_unknown_kind():
    with pytest.raises(ValueError):
        OptionSpec("slider")


def test_general_options_defaults():
    values = merge_defaults(GENERAL_OPTIONS)
    assert values == {"name": "new element", "hidden": False, "color": "#ffffff", "stroke": 1.0}


def test_specific_mapping_overrides_only_listed_fields():
    schema = resolve_schema(GENERAL_OPTIONS, {"stroke": {"default": 3.0}})
    assert schema["stroke"].default == 3.0
    assert schema["stroke"].minimum == 0.5
    assert schema["stroke"].maximum == 5.0


def test_specific_spec_adds_new_option():
    schema = resolve_schema(GENERAL_OPTIONS, {"function": OptionSpec(TEXT, "x")})
    assert set(schema) == set(GENERAL_OPTIONS) | {"function"}


def test_override_of_unknown_option_fails():
    with pytest.raises(ValueError):
        resolve_schema(GENERAL_OPTIONS, {"size": {"default": 3}})


def test_merge_defaults_prefers_provided_values():
    values = merge_defaults(GENERAL_OPTIONS, {"name": "parabola", "stroke": "2.5", "hidden": None})
    assert values["name"] == "parabola"
    assert values["stroke"] == 2.5
    assert values["hidden"] is False
    assert "delete" not in values


def test_merge_defaults_rejects_unknown_names():
    with pytest.raises(ValueError, match="colour"):
        merge_defaults(GENERAL_OPTIONS, {"colour": "#000000"})


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("Yes", True), ("0", False), ("off", False), (1, True), (0, False)],
)
def test_checkbox_coercion(raw, expected):
    assert coerce_value("hidden", OptionSpec(CHECKBOX, False), raw) is expected


def test_range_coercion_clamps():
    spec = OptionSpec(RANGE, 1.0, minimum=0.5, maximum=5.0)
    assert coerce_value("stroke", spec, 10) == 5.0
    assert coerce_value("stroke", spec, "0.1") == 0.5
    with pytest.raises(ValueError):
        coerce_value("stroke", spec, "thick")


def test_button_has_no_value():
    assert coerce_value("delete", OptionSpec(BUTTON), "clicked") is None
