"""Finite-difference Jacobians and a local Newton solver for 2D maps.

The solver is local: it converges only from a reasonable initial guess on a
smooth map. Failures (singular Jacobian, exhausted iterations, divergence)
are reported through :class:`RootResult` rather than raised, because callers
use the roots for approximate, visual purposes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from plane_viewer.geometry_core.algebra import Matrix2, Vec2

logger = logging.getLogger(__name__)

PlaneMap = Callable[[Vec2], Vec2]

JACOBIAN_STEP = 1e-5
DEFAULT_INITIAL_GUESS = Vec2(1.0, 1.0)
DEFAULT_MAX_ITERATIONS = 20
DEFAULT_TOLERANCE = 1e-7


class RootStatus(str, Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    SINGULAR_JACOBIAN = "singular_jacobian"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class RootResult:
    point: Vec2
    status: RootStatus
    iterations: int
    residual: float

    @property
    def converged(self) -> bool:
        return self.status is RootStatus.CONVERGED


def jacobian(func: PlaneMap, step: float = JACOBIAN_STEP) -> Callable[[Vec2], Matrix2]:
    """Return ``v -> J(v)`` estimated with one-sided differences."""

    def evaluate(v: Vec2) -> Matrix2:
        base = func(v)
        d_dx = func(Vec2(v.x + step, v.y)).subtract(base).scale(1.0 / step)
        d_dy = func(Vec2(v.x, v.y + step)).subtract(base).scale(1.0 / step)
        return Matrix2.from_columns(d_dx, d_dy)

    return evaluate


def find_root_2d(
    func: PlaneMap,
    initial: Vec2 = DEFAULT_INITIAL_GUESS,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> RootResult:
    """Newton iteration ``x <- x - J(x)^-1 f(x)`` starting from ``initial``.

    The returned point is the last iterate reached; it satisfies ``tolerance``
    only when ``status`` is ``CONVERGED``.
    """
    derivative = jacobian(func)
    x = initial
    residual = float("inf")
    for iteration in range(max_iterations):
        y = func(x)
        if not y.is_finite():
            return RootResult(x, RootStatus.DIVERGED, iteration, residual)
        residual = y.magnitude()
        if residual < tolerance:
            return RootResult(x, RootStatus.CONVERGED, iteration, residual)

        inverse = derivative(x).try_inverse()
        if not inverse.ok:
            logger.debug("Singular Jacobian at %s after %d iterations", x, iteration)
            return RootResult(x, RootStatus.SINGULAR_JACOBIAN, iteration, residual)

        candidate = x.subtract(inverse.unwrap().apply(y))
        if not candidate.is_finite():
            return RootResult(x, RootStatus.DIVERGED, iteration, residual)
        x = candidate

    y = func(x)
    if y.is_finite():
        residual = y.magnitude()
        if residual < tolerance:
            return RootResult(x, RootStatus.CONVERGED, max_iterations, residual)
    return RootResult(x, RootStatus.MAX_ITERATIONS, max_iterations, residual)


def inverse_2d(
    func: PlaneMap,
    initial: Vec2 = DEFAULT_INITIAL_GUESS,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> PlaneMap:
    """Return a best-effort pre-image estimator ``y -> x`` with ``func(x) ≈ y``."""

    def invert(target: Vec2) -> Vec2:
        result = find_root_2d(
            lambda x: func(x).subtract(target),
            initial,
            max_iterations,
            tolerance,
        )
        if not result.converged:
            logger.debug(
                "Pre-image of %s not converged (%s, residual %.3g)",
                target,
                result.status.value,
                result.residual,
            )
        return result.point

    return invert
