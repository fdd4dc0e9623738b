"""Procedural building mesh synthesis from footprint and height grids."""

__version__ = "0.1.0"
