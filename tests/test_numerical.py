import math

import pytest

from plane_viewer.geometry.numerical import (
    RootStatus,
    find_root_2d,
    inverse_2d,
    jacobian,
)
from plane_viewer.geometry_core import Vec2


def _square(v: Vec2) -> Vec2:
    return Vec2(v.x * v.x - v.y * v.y, 2 * v.x * v.y)


def test_jacobian_of_linear_map_is_its_matrix():
    j = jacobian(lambda v: Vec2(2 * v.x + v.y, -3 * v.y))(Vec2(5.0, -2.0))
    assert j.a == pytest.approx(2.0, abs=1e-4)
    assert j.b == pytest.approx(1.0, abs=1e-4)
    assert j.c == pytest.approx(0.0, abs=1e-4)
    assert j.d == pytest.approx(-3.0, abs=1e-4)


def test_jacobian_of_square_map():
    j = jacobian(_square)(Vec2(1.0, 2.0))
    # d/dx = (2x, 2y), d/dy = (-2y, 2x)
    assert j.column(0).x == pytest.approx(2.0, abs=1e-3)
    assert j.column(0).y == pytest.approx(4.0, abs=1e-3)
    assert j.column(1).x == pytest.approx(-4.0, abs=1e-3)
    assert j.column(1).y == pytest.approx(2.0, abs=1e-3)


def test_find_root_converges_on_smooth_map():
    result = find_root_2d(lambda v: Vec2(v.x * v.x - 4.0, v.y - 1.0))
    assert result.converged
    assert result.status is RootStatus.CONVERGED
    assert result.point.x == pytest.approx(2.0, abs=1e-6)
    assert result.point.y == pytest.approx(1.0, abs=1e-6)
    assert result.residual < 1e-7


def test_find_root_reports_singular_jacobian():
    result = find_root_2d(lambda v: Vec2(v.x + v.y - 1.0, v.x + v.y - 1.0))
    assert result.status is RootStatus.SINGULAR_JACOBIAN
    assert result.point == Vec2(1.0, 1.0)
    assert result.iterations == 0


def test_find_root_reports_divergence():
    result = find_root_2d(lambda v: Vec2(math.nan, v.y))
    assert result.status is RootStatus.DIVERGED
    assert not result.converged


def test_find_root_without_real_root_gives_up():
    result = find_root_2d(lambda v: Vec2(v.x * v.x + 1.0, v.y), max_iterations=5)
    assert not result.converged
    assert result.iterations <= 5


def test_find_root_starts_from_initial_guess():
    result = find_root_2d(lambda v: Vec2(v.x * v.x - 4.0, v.y), initial=Vec2(-1.0, 0.5))
    assert result.converged
    assert result.point.x == pytest.approx(-2.0, abs=1e-6)


def test_inverse_of_identity():
    inverse = inverse_2d(lambda v: v)
    pre = inverse(Vec2(3.0, 4.0))
    assert pre.x == pytest.approx(3.0, abs=1e-6)
    assert pre.y == pytest.approx(4.0, abs=1e-6)


def test_inverse_of_square_map_round_trips():
    inverse = inverse_2d(_square)
    target = Vec2(3.0, 4.0)
    pre = inverse(target)
    image = _square(pre)
    assert image.x == pytest.approx(3.0, abs=1e-6)
    assert image.y == pytest.approx(4.0, abs=1e-6)
    assert pre.x == pytest.approx(2.0, abs=1e-6)
    assert pre.y == pytest.approx(1.0, abs=1e-6)


def test_inverse_returns_last_iterate_when_not_converged():
    inverse = inverse_2d(lambda v: Vec2(v.x + v.y, v.x + v.y))
    assert inverse(Vec2(5.0, -3.0)) == Vec2(1.0, 1.0)
