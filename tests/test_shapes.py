import pytest

from plane_viewer.geometry_core import (
    AffineTransform,
    DegenerateVectorError,
    Line,
    LineSegment,
    Matrix2,
    Path,
    Polygon,
    Rectangle,
    Vec2,
)


def _as_tuples(points):
    return [(pytest.approx(p.x), pytest.approx(p.y)) for p in points]


def test_rectangle_sorts_corners():
    rect = Rectangle(5.0, 6.0, 1.0, 2.0)
    assert (rect.min_x, rect.min_y, rect.max_x, rect.max_y) == (1.0, 2.0, 5.0, 6.0)
    assert rect.width == 4.0
    assert rect.height == 4.0
    assert rect.center == Vec2(3.0, 4.0)


def test_rectangle_bounds_clip_and_contains():
    rect = Rectangle.bounds([Vec2(1.0, -1.0), Vec2(-2.0, 3.0), Vec2(0.0, 0.0)])
    assert (rect.min_x, rect.min_y, rect.max_x, rect.max_y) == (-2.0, -1.0, 1.0, 3.0)
    assert rect.contains(Vec2(0.5, 2.0))
    assert not rect.contains(Vec2(1.5, 2.0))
    assert rect.clip(Vec2(5.0, -7.0)) == Vec2(1.0, -1.0)

    with pytest.raises(ValueError):
        Rectangle.bounds([])


def test_rectangle_margin_and_integer_bounds():
    rect = Rectangle(-1.5, 0.2, 2.1, 3.0)

    expanded = rect.expanded_to_integer_bounds()
    assert (expanded.min_x, expanded.min_y, expanded.max_x, expanded.max_y) == (-2, 0, 3, 3)
    contracted = rect.contracted_to_integer_bounds()
    assert (contracted.min_x, contracted.min_y, contracted.max_x, contracted.max_y) == (-1, 1, 2, 3)

    shrunk = Rectangle(0.0, 0.0, 100.0, 50.0).shrink(10.0)
    assert (shrunk.min_x, shrunk.min_y, shrunk.max_x, shrunk.max_y) == (10.0, 10.0, 90.0, 40.0)


def test_rectangle_affine_maps_unit_square():
    rect = Rectangle(2.0, 3.0, 6.0, 5.0)
    transform = rect.to_affine_transform()
    assert transform.apply(Vec2.ZERO) == Vec2(2.0, 3.0)
    assert transform.apply(Vec2(1.0, 1.0)) == Vec2(6.0, 5.0)


def test_rectangle_populate_lattice():
    points = Rectangle(0.0, 0.0, 2.0, 2.0).populate(2)
    assert len(points) == 9
    assert Vec2(1.0, 1.0) in points
    with pytest.raises(ValueError):
        Rectangle.UNIT.populate(0)


def test_polygon_line_intersection_sorted_along_line():
    square = Rectangle(0.0, 0.0, 10.0, 10.0).to_polygon()
    hits = square.intersect_line(Line(Vec2(0.0, 5.0), Vec2.EX))
    assert _as_tuples(hits) == [(0.0, 5.0), (10.0, 5.0)]

    reverse = square.intersect_line(Line(Vec2(20.0, 5.0), Vec2(-1.0, 0.0)))
    assert _as_tuples(reverse) == [(10.0, 5.0), (0.0, 5.0)]


def test_polygon_shared_vertex_counted_once():
    diamond = Polygon(
        [Vec2(0.0, -1.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0), Vec2(-1.0, 0.0)]
    )
    hits = diamond.intersect_line(Line(Vec2.ZERO, Vec2.EX))
    assert _as_tuples(hits) == [(-1.0, 0.0), (1.0, 0.0)]


def test_line_missing_polygon_has_no_hits():
    square = Rectangle(0.0, 0.0, 1.0, 1.0).to_polygon()
    assert square.intersect_line(Line(Vec2(0.0, 5.0), Vec2.EX)) == []


def test_line_requires_nonzero_direction():
    with pytest.raises(DegenerateVectorError):
        Line(Vec2.ZERO, Vec2.ZERO)


def test_line_direction_is_normalized():
    line = Line(Vec2.ZERO, Vec2(0.0, 3.0))
    assert line.direction == Vec2(0.0, 1.0)
    assert line.point_at(2.0) == Vec2(0.0, 2.0)


def test_line_line_intersection():
    horizontal = Line(Vec2.ZERO, Vec2.EX)
    vertical = Line(Vec2(3.0, -1.0), Vec2.EY)
    hit = horizontal.intersect_line(vertical)
    assert hit is not None
    assert _as_tuples([hit]) == [(3.0, 0.0)]

    assert horizontal.intersect_line(Line(Vec2(0.0, 1.0), Vec2(2.0, 0.0))) is None


def test_segment_intersection_is_bounded():
    segment = LineSegment(Vec2.ZERO, Vec2(4.0, 4.0))
    assert _as_tuples(segment.intersect_line(Line(Vec2(0.0, 2.0), Vec2.EX))) == [(2.0, 2.0)]
    assert segment.intersect_line(Line(Vec2(0.0, 5.0), Vec2.EX)) == []
    assert segment.length() == pytest.approx(4.0 * 2 ** 0.5)
    assert segment.to_path() == Path([Vec2.ZERO, Vec2(4.0, 4.0)])


def test_path_subdivide_keeps_endpoints():
    path = Path([Vec2.ZERO, Vec2(2.0, 0.0), Vec2(2.0, 2.0)])
    subdivided = path.subdivide(2)
    assert list(subdivided) == [
        Vec2(0.0, 0.0),
        Vec2(1.0, 0.0),
        Vec2(2.0, 0.0),
        Vec2(2.0, 1.0),
        Vec2(2.0, 2.0),
    ]
    with pytest.raises(ValueError):
        path.subdivide(0)


def test_polygon_subdivide_wraps_around():
    triangle = Polygon([Vec2.ZERO, Vec2(2.0, 0.0), Vec2(2.0, 2.0)])
    subdivided = triangle.subdivide(2)
    assert isinstance(subdivided, Polygon)
    assert len(subdivided) == 6
    assert subdivided.vertices[-1] == Vec2(1.0, 1.0)


def test_chain_edges_and_conversions():
    vertices = [Vec2.ZERO, Vec2(1.0, 0.0), Vec2(1.0, 1.0)]
    assert len(Path(vertices).edges()) == 2
    assert len(Polygon(vertices).edges()) == 3
    assert Path(vertices).closed() == Polygon(vertices)
    assert Polygon(vertices).opened() == Path(vertices)
    assert Path(vertices) != Polygon(vertices)


def test_chain_transform_and_map_keep_type():
    polygon = Rectangle.UNIT.to_polygon()
    moved = polygon.transform(AffineTransform(Matrix2.uniform_scale(2.0), Vec2(1.0, 0.0)))
    assert isinstance(moved, Polygon)
    bounds = moved.bounding_rectangle()
    assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (1.0, 0.0, 3.0, 2.0)

    flipped = Path([Vec2(1.0, 2.0)]).map(lambda v: Vec2(v.y, v.x))
    assert flipped == Path([Vec2(2.0, 1.0)])


def test_chains_are_immutable():
    path = Path([Vec2.ZERO])
    with pytest.raises(AttributeError):
        path.vertices = ()


def test_rectangle_clip_lands_inside():
    rect = Rectangle(0.0, 0.0, 10.0, 10.0)
    for point in (Vec2(-5.0, 3.0), Vec2(12.0, 20.0), Vec2(4.0, 4.0)):
        assert rect.contains(rect.clip(point))
    assert rect.clip(Vec2(4.0, 4.0)) == Vec2(4.0, 4.0)


def test_line_through_center_clips_to_square_edges():
    square = Rectangle(0.0, 0.0, 10.0, 10.0).to_polygon()
    hits = square.intersect_line(Line(Vec2(5.0, 5.0), Vec2(1.0, 0.0)))
    assert hits == [Vec2(0.0, 5.0), Vec2(10.0, 5.0)]
