"""Immutable viewport model."""
