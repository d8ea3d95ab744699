"""Declarative option schema for plane shapes.

Each shape kind describes its user-facing options as ``{name: OptionSpec}``.
The Qt option panel builds its editors from this schema; the shapes only see
the merged, coerced values.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Union

TEXT = "text"
CHECKBOX = "checkbox"
COLOR = "color"
RANGE = "range"
BUTTON = "button"

OPTION_KINDS = (TEXT, CHECKBOX, COLOR, RANGE, BUTTON)


@dataclass(frozen=True)
class OptionSpec:
    kind: str
    default: Any = None
    label: str = ""
    minimum: float | None = None
    maximum: float | None = None
    step: float | None = None
    effect: str = ""

    def __post_init__(self) -> None:
        if self.kind not in OPTION_KINDS:
            raise ValueError(f"Unknown option kind {self.kind!r}.")


OptionOverride = Union[OptionSpec, Mapping[str, Any]]
Schema = Mapping[str, OptionSpec]


GENERAL_OPTIONS: dict[str, OptionSpec] = {
    "name": OptionSpec(TEXT, "new element", "name", effect="label in the shape list"),
    "hidden": OptionSpec(CHECKBOX, False, "hidden", effect="skip drawing"),
    "delete": OptionSpec(BUTTON, None, "delete", effect="remove the shape"),
    "color": OptionSpec(COLOR, "#ffffff", "color", effect="stroke color"),
    "stroke": OptionSpec(
        RANGE, 1.0, "stroke", minimum=0.5, maximum=5.0, step=1.0, effect="stroke width"
    ),
}


def resolve_schema(general: Schema, specific: Mapping[str, OptionOverride]) -> dict[str, OptionSpec]:
    """Combine general and shape-specific options.

    A specific entry given as a mapping only overrides the listed fields of the
    general option with the same name.
    """
    schema: dict[str, OptionSpec] = dict(general)
    for name, override in specific.items():
        if isinstance(override, OptionSpec):
            schema[name] = override
            continue
        base = schema.get(name)
        if base is None:
            raise ValueError(f"Option {name!r} has no base definition to override.")
        schema[name] = replace(base, **dict(override))
    return schema


def coerce_value(name: str, spec: OptionSpec, raw: Any) -> Any:
    """Convert a raw UI or caller value into the option's Python type."""
    if spec.kind == CHECKBOX:
        if isinstance(raw, str):
            return raw.strip().lower() in {"1", "true", "yes", "on"}
        return bool(raw)
    if spec.kind == RANGE:
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Option {name!r} expects a number, got {raw!r}.") from exc
        if spec.minimum is not None:
            value = max(spec.minimum, value)
        if spec.maximum is not None:
            value = min(spec.maximum, value)
        return value
    if spec.kind == BUTTON:
        return None
    return "" if raw is None else str(raw)


def merge_defaults(schema: Schema, provided: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return option values: provided values where given, else schema defaults."""
    provided = provided or {}
    unknown = set(provided) - set(schema)
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}.")
    values: dict[str, Any] = {}
    for name, spec in schema.items():
        if spec.kind == BUTTON:
            continue
        if name in provided and provided[name] is not None:
            values[name] = coerce_value(name, spec, provided[name])
        else:
            values[name] = spec.default
    return values
