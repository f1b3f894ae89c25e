"""Outer surfaces of the context pipeline (developer CLI)."""
