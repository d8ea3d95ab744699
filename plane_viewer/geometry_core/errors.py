"""Recoverable failures raised by the geometry kernel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class GeometryError(ValueError):
    """Base class for local, per-element geometry failures."""


class DegenerateVectorError(GeometryError):
    """Raised when a vector too close to zero length has to be normalized."""


class SingularMatrixError(GeometryError):
    """Raised when a matrix with a (near) zero determinant has to be inverted."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation that may fail for a single element.

    Batch callers (grid line generation, function sampling) check ``ok`` per
    element and skip failures instead of unwinding the whole pass.
    """

    value: T | None = None
    error: GeometryError | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GeometryError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
