"""Shape renderers producing screen-space stroke paths."""
