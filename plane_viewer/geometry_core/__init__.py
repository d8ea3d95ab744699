from .affine import AffineTransform
from .algebra import EPSILON, Matrix2, Vec2
from .errors import DegenerateVectorError, GeometryError, Result, SingularMatrixError
from .shapes import Line, LineSegment, Path, Polygon, Rectangle

__all__ = [
    "EPSILON",
    "Vec2",
    "Matrix2",
    "AffineTransform",
    "Rectangle",
    "Line",
    "LineSegment",
    "Path",
    "Polygon",
    "GeometryError",
    "DegenerateVectorError",
    "SingularMatrixError",
    "Result",
]
