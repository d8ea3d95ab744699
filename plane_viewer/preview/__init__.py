"""Viewport event handling: pure transitions plus the stateful controller."""
