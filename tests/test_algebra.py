import math

import pytest

from plane_viewer.geometry_core import (
    AffineTransform,
    DegenerateVectorError,
    Matrix2,
    SingularMatrixError,
    Vec2,
)


def _close(a: Vec2, b: Vec2, tol: float = 1e-9) -> bool:
    return a.distance_to(b) <= tol


def test_vector_arithmetic_and_operators():
    a = Vec2(1.0, 2.0)
    b = Vec2(3.0, -1.0)

    assert a + b == Vec2(4.0, 1.0)
    assert a - b == Vec2(-2.0, 3.0)
    assert -a == Vec2(-1.0, -2.0)
    assert 2 * a == a * 2 == Vec2(2.0, 4.0)
    assert a.dot(b) == pytest.approx(1.0)
    assert Vec2(3.0, 4.0).magnitude() == pytest.approx(5.0)


def test_complex_multiply_rotates_by_unit_vector():
    i = Vec2(0.0, 1.0)
    assert Vec2(1.0, 0.0).complex_multiply(i) == Vec2(0.0, 1.0)
    assert i.complex_multiply(i) == Vec2(-1.0, 0.0)


def test_power_matches_complex_exponentiation():
    z = Vec2(1.0, 1.0)
    squared = z.power(2)
    assert _close(squared, Vec2(0.0, 2.0))

    root = Vec2(-4.0, 0.0).power(0.5)
    assert _close(root, Vec2(0.0, 2.0))


def test_power_of_zero_vector_is_deterministic():
    assert Vec2.ZERO.power(0) == Vec2(1.0, 0.0)
    assert Vec2.ZERO.power(3) == Vec2.ZERO


def test_normalized_has_unit_length():
    unit = Vec2(3.0, -4.0).normalized()
    assert unit.magnitude() == pytest.approx(1.0)
    assert _close(unit, Vec2(0.6, -0.8))


def test_normalizing_zero_vector_fails():
    with pytest.raises(DegenerateVectorError):
        Vec2.ZERO.normalized()

    result = Vec2.ZERO.try_normalized()
    assert not result.ok
    with pytest.raises(DegenerateVectorError):
        result.unwrap()


def test_matrix_inverse_round_trip():
    m = Matrix2(2.0, 1.0, -1.0, 3.0)
    v = Vec2(0.5, -7.0)

    assert m.determinant() == pytest.approx(7.0)
    assert _close(m.inverse().apply(m.apply(v)), v)
    product = m.multiply(m.inverse())
    for got, want in zip((product.a, product.b, product.c, product.d), (1, 0, 0, 1)):
        assert got == pytest.approx(want, abs=1e-12)


def test_singular_matrix_inverse_fails():
    singular = Matrix2(1.0, 2.0, 2.0, 4.0)
    with pytest.raises(SingularMatrixError):
        singular.inverse()
    assert not singular.try_inverse().ok


def test_matrix_columns_rows_and_transpose():
    m = Matrix2.from_columns(Vec2(1.0, 2.0), Vec2(3.0, 4.0))
    assert m == Matrix2(1.0, 3.0, 2.0, 4.0)
    assert m.column(1) == Vec2(3.0, 4.0)
    assert m.row(0) == Vec2(1.0, 3.0)
    assert m.transpose() == Matrix2.from_rows(Vec2(1.0, 2.0), Vec2(3.0, 4.0))
    with pytest.raises(IndexError):
        m.column(2)


def test_rotation_matrix_preserves_length():
    rotated = Matrix2.rotation(math.pi / 2).apply(Vec2(2.0, 0.0))
    assert _close(rotated, Vec2(0.0, 2.0))
    assert Matrix2.rotation(0.3).determinant() == pytest.approx(1.0)


def test_affine_inverse_round_trip():
    transform = AffineTransform(Matrix2(50.0, 0.0, 0.0, -50.0), Vec2(400.0, 300.0))
    point = Vec2(1.5, -2.0)

    screen = transform(point)
    assert screen == Vec2(475.0, 400.0)
    assert _close(transform.inverse().apply(screen), point)


def test_affine_compose_applies_right_operand_first():
    scale = AffineTransform(Matrix2.uniform_scale(2.0))
    shift = AffineTransform.translation_by(Vec2(1.0, 0.0))
    point = Vec2(1.0, 1.0)

    assert scale.compose(shift).apply(point) == Vec2(4.0, 2.0)
    assert shift.compose(scale).apply(point) == Vec2(3.0, 2.0)


def test_rotation_about_keeps_center_fixed():
    center = Vec2(2.0, 3.0)
    rotation = AffineTransform.rotation_about(math.pi / 3, center)
    assert _close(rotation.apply(center), center)


def test_affine_clip_clamps_into_image_of_unit_square():
    square = AffineTransform(Matrix2(10.0, 0.0, 0.0, 10.0), Vec2(5.0, 5.0))

    assert _close(square.clip(Vec2(8.0, 9.0)), Vec2(8.0, 9.0))
    assert _close(square.clip(Vec2(0.0, 30.0)), Vec2(5.0, 15.0))


def test_affine_clip_of_degenerate_map_fails():
    collapsed = AffineTransform(Matrix2(1.0, 1.0, 1.0, 1.0))
    with pytest.raises(SingularMatrixError):
        collapsed.clip(Vec2.ZERO)
    assert not collapsed.try_inverse().ok


def test_bounding_rectangle_of_affine_image():
    transform = AffineTransform(Matrix2(2.0, 0.0, 0.0, -3.0), Vec2(1.0, 1.0))
    bounds = transform.bounding_rectangle()
    assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (1.0, -2.0, 3.0, 1.0)


def test_compose_matches_sequential_application():
    a = AffineTransform(Matrix2(1.0, 2.0, -0.5, 3.0), Vec2(4.0, -1.0))
    b = AffineTransform.rotation_about(0.7, Vec2(1.0, 1.0))
    for v in (Vec2.ZERO, Vec2(2.5, -3.0), Vec2(-10.0, 7.0)):
        assert _close(a.compose(b).apply(v), a.apply(b.apply(v)))
