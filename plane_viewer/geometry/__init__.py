"""Pure numerical helpers layered on the geometry kernel."""
