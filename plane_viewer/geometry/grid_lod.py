"""Grid level of detail: line ranks and zoom-dependent cell sizes."""

from __future__ import annotations

import math

from plane_viewer.geometry_core.algebra import Matrix2

ORIGIN_RANK = 3
MAX_TRAILING_ZEROS = 2


def count_trailing_zeros(n: int, limit: int = MAX_TRAILING_ZEROS) -> int:
    """Count base-10 trailing zeros of ``n``, stopping at ``limit``."""
    n = abs(int(n))
    count = 0
    while count < limit and n != 0 and n % 10 == 0:
        n //= 10
        count += 1
    return count


def determine_grid_line_rank(n: int) -> int:
    """Visual prominence tier (0-3) of the grid line at lattice index ``n``."""
    if n == 0:
        return ORIGIN_RANK
    return count_trailing_zeros(n, MAX_TRAILING_ZEROS)


def zoom_level(linear: Matrix2) -> float:
    """Isotropic scale factor of ``linear`` (screen pixels per world unit)."""
    return math.sqrt(abs(linear.determinant()))


def grid_cell_size(zoom: float, reference_size: float) -> float:
    """Power of ten cell size keeping on-screen cells near ``reference_size`` pixels."""
    if zoom <= 0 or reference_size <= 0:
        raise ValueError(
            f"zoom and reference_size must be positive (got {zoom!r}, {reference_size!r})."
        )
    exponent = math.ceil(math.log10(zoom / reference_size))
    return 10.0 ** (-exponent)


def stroke_width_for_rank(stroke: float, rank: int) -> float:
    return stroke / 4 + rank
