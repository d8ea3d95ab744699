"""Interactive 2D plane viewer: grid, axes, function graphs and plane transforms."""

__version__ = "0.3.0"
