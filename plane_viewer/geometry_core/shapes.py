"""Rectangles, lines and vertex chains with clipping helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, ClassVar, Iterable, Iterator

from plane_viewer.geometry_core.affine import AffineTransform
from plane_viewer.geometry_core.algebra import Matrix2, Vec2

Edge = tuple[Vec2, Vec2]


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle; the two corners may be given in any order."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    UNIT: ClassVar["Rectangle"]

    def __post_init__(self) -> None:
        x1, y1, x2, y2 = self.min_x, self.min_y, self.max_x, self.max_y
        object.__setattr__(self, "min_x", min(x1, x2))
        object.__setattr__(self, "max_x", max(x1, x2))
        object.__setattr__(self, "min_y", min(y1, y2))
        object.__setattr__(self, "max_y", max(y1, y2))

    @classmethod
    def bounds(cls, points: Iterable[Vec2]) -> Rectangle:
        points = list(points)
        if not points:
            raise ValueError("Cannot bound an empty point set.")
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Vec2:
        return Vec2((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def scale(self, factor: float) -> Rectangle:
        return Rectangle(
            factor * self.min_x,
            factor * self.min_y,
            factor * self.max_x,
            factor * self.max_y,
        )

    def expand(self, margin: float) -> Rectangle:
        return Rectangle(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin,
        )

    def shrink(self, margin: float) -> Rectangle:
        return self.expand(-margin)

    def clip(self, point: Vec2) -> Vec2:
        return Vec2(
            max(self.min_x, min(point.x, self.max_x)),
            max(self.min_y, min(point.y, self.max_y)),
        )

    def contains(self, point: Vec2) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def to_polygon(self) -> Polygon:
        return Polygon(
            (
                Vec2(self.min_x, self.min_y),
                Vec2(self.max_x, self.min_y),
                Vec2(self.max_x, self.max_y),
                Vec2(self.min_x, self.max_y),
            )
        )

    def to_affine_transform(self) -> AffineTransform:
        """Map the unit square onto this rectangle."""
        return AffineTransform(
            Matrix2(self.width, 0.0, 0.0, self.height),
            Vec2(self.min_x, self.min_y),
        )

    def expanded_to_integer_bounds(self) -> Rectangle:
        return Rectangle(
            math.floor(self.min_x),
            math.floor(self.min_y),
            math.ceil(self.max_x),
            math.ceil(self.max_y),
        )

    def contracted_to_integer_bounds(self) -> Rectangle:
        return Rectangle(
            math.ceil(self.min_x),
            math.ceil(self.min_y),
            math.floor(self.max_x),
            math.floor(self.max_y),
        )

    def populate(self, density: int) -> list[Vec2]:
        """Return a ``(density + 1) x (density + 1)`` lattice covering the rectangle."""
        if density < 1:
            raise ValueError(f"density must be at least 1, got {density}.")
        return [
            Vec2(
                self.min_x + i * self.width / density,
                self.min_y + j * self.height / density,
            )
            for i in range(density + 1)
            for j in range(density + 1)
        ]


Rectangle.UNIT = Rectangle(0.0, 0.0, 1.0, 1.0)


def _solve_edge(line: "Line", start: Vec2, end: Vec2) -> tuple[float, float] | None:
    """Return ``(s, t)`` with ``line.origin + s*dir == start + t*(end - start)``.

    ``None`` means the edge runs parallel to the line.
    """
    basis_change = Matrix2.from_columns(line.direction, end.subtract(start).negate())
    if basis_change.determinant() == 0:
        return None
    inverse = basis_change.try_inverse()
    if not inverse.ok:
        return None
    scalars = inverse.unwrap().apply(start.subtract(line.origin))
    return scalars.x, scalars.y


def _intersect_edges(edges: Iterable[Edge], line: "Line") -> list[Vec2]:
    # t is half-open so a vertex shared by two edges is counted once.
    hits: list[float] = []
    for start, end in edges:
        solution = _solve_edge(line, start, end)
        if solution is None:
            continue
        s, t = solution
        if t < 0 or t >= 1:
            continue
        hits.append(s)
    hits.sort()
    return [line.point_at(s) for s in hits]


@dataclass(frozen=True)
class Line:
    """Infinite line ``origin + s * direction`` with a unit direction."""

    origin: Vec2
    direction: Vec2

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalized())

    def point_at(self, s: float) -> Vec2:
        return self.origin.add(self.direction.scale(s))

    def intersect_line(self, other: Line) -> Vec2 | None:
        basis_change = Matrix2.from_columns(self.direction, other.direction.negate())
        inverse = basis_change.try_inverse()
        if not inverse.ok:
            return None
        solution = inverse.unwrap().apply(other.origin.subtract(self.origin))
        return self.point_at(solution.x)


@dataclass(frozen=True)
class LineSegment:
    start: Vec2
    end: Vec2

    @property
    def direction(self) -> Vec2:
        return self.end.subtract(self.start)

    def length(self) -> float:
        return self.direction.magnitude()

    def intersect_line(self, line: Line) -> list[Vec2]:
        solution = _solve_edge(line, self.start, self.end)
        if solution is None:
            return []
        _, t = solution
        if 0 <= t <= 1:
            return [self.start.add(self.direction.scale(t))]
        return []

    def to_path(self) -> Path:
        return Path((self.start, self.end))


class _VertexChain:
    """Shared behaviour of open paths and closed polygons."""

    closed_chain: ClassVar[bool] = False
    vertices: tuple[Vec2, ...]

    def __init__(self, vertices: Iterable[Vec2]) -> None:
        object.__setattr__(self, "vertices", tuple(vertices))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.vertices == other.vertices  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.vertices))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.vertices)!r})"

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vec2]:
        return iter(self.vertices)

    def edges(self) -> list[Edge]:
        count = len(self.vertices)
        if count < 2:
            return []
        pairs = list(zip(self.vertices, self.vertices[1:]))
        if self.closed_chain:
            pairs.append((self.vertices[-1], self.vertices[0]))
        return pairs

    def transform(self, transform: AffineTransform):
        return type(self)(transform.apply(v) for v in self.vertices)

    def map(self, func: Callable[[Vec2], Vec2]):
        return type(self)(func(v) for v in self.vertices)

    def bounding_rectangle(self) -> Rectangle:
        return Rectangle.bounds(self.vertices)

    def intersect_line(self, line: Line) -> list[Vec2]:
        """Points where ``line`` crosses the chain, sorted along the line."""
        return _intersect_edges(self.edges(), line)

    def _subdivided_edges(self, n: int) -> list[Vec2]:
        if n < 1:
            raise ValueError(f"subdivision count must be at least 1, got {n}.")
        points: list[Vec2] = []
        for start, end in self.edges():
            delta = end.subtract(start)
            points.extend(start.add(delta.scale(j / n)) for j in range(n))
        return points


class Path(_VertexChain):
    """Open chain of vertices; the last vertex is not joined to the first."""

    closed_chain = False

    def subdivide(self, n: int) -> Path:
        if not self.vertices:
            return self
        return Path([*self._subdivided_edges(n), self.vertices[-1]])

    def closed(self) -> Polygon:
        return Polygon(self.vertices)


class Polygon(_VertexChain):
    """Closed chain; an edge runs from the last vertex back to the first."""

    closed_chain = True

    def subdivide(self, n: int) -> Polygon:
        if len(self.vertices) < 2:
            return self
        return Polygon(self._subdivided_edges(n))

    def opened(self) -> Path:
        return Path(self.vertices)
