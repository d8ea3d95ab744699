"""Compile user-typed expressions into numeric callables.

Only the text-to-callable step lives here. The geometry kernel receives the
resulting callables as opaque functions and never sees expression text.
"""
from __future__ import annotations

import logging
from typing import Callable

import sympy
from sympy.core.function import AppliedUndef

from plane_viewer.geometry_core import Vec2

logger = logging.getLogger(__name__)

X, Y = sympy.symbols("x y", real=True)
_LOCALS = {"x": X, "y": Y, "e": sympy.E, "pi": sympy.pi}


class ExpressionError(ValueError):
    """Raised when expression text cannot be turned into a callable."""


def _parse(text: str, allowed: set[sympy.Symbol]) -> sympy.Expr:
    if not text or not text.strip():
        raise ExpressionError("Expression is empty.")
    try:
        expr = sympy.sympify(text, locals=_LOCALS, convert_xor=True)
    except (sympy.SympifyError, SyntaxError, TypeError, ValueError) as exc:
        raise ExpressionError(f"Cannot parse {text!r}: {exc}") from exc
    if not isinstance(expr, sympy.Expr):
        raise ExpressionError(f"{text!r} is not a numeric expression.")
    undefined = expr.atoms(AppliedUndef)
    if undefined:
        names = ", ".join(sorted(str(f.func) for f in undefined))
        raise ExpressionError(f"Unknown function(s) in {text!r}: {names}.")
    unknown = expr.free_symbols - allowed
    if unknown:
        names = ", ".join(sorted(str(s) for s in unknown))
        raise ExpressionError(f"Unknown symbol(s) in {text!r}: {names}.")
    return expr


def _as_real(value: object) -> float:
    if isinstance(value, complex):
        if value.imag != 0:
            raise ValueError(f"Expression produced complex value {value!r}.")
        value = value.real
    return float(value)  # type: ignore[arg-type]


def compile_function(text: str) -> Callable[[float], float]:
    """Return ``x -> f(x)`` for a single-variable expression."""
    expr = _parse(text, {X})
    evaluate = sympy.lambdify(X, expr, modules="math")

    def function(x: float) -> float:
        return _as_real(evaluate(x))

    logger.debug("Compiled function y = %s", expr)
    return function


def compile_map(x_text: str, y_text: str) -> Callable[[Vec2], Vec2]:
    """Return ``(x, y) -> (fx(x, y), fy(x, y))`` as a :class:`Vec2` map."""
    fx = sympy.lambdify((X, Y), _parse(x_text, {X, Y}), modules="math")
    fy = sympy.lambdify((X, Y), _parse(y_text, {X, Y}), modules="math")

    def plane_map(p: Vec2) -> Vec2:
        return Vec2(_as_real(fx(p.x, p.y)), _as_real(fy(p.x, p.y)))

    logger.debug("Compiled plane map (%s, %s)", x_text, y_text)
    return plane_map


def compile_function_or(text: str, fallback: str = "x") -> Callable[[float], float]:
    """Compile ``text``; fall back to ``fallback`` when it cannot be parsed."""
    try:
        return compile_function(text)
    except ExpressionError as exc:
        logger.info("Using fallback %r for graph: %s", fallback, exc)
        return compile_function(fallback)
