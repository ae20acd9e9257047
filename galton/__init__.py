"""Galton board simulation on Pymunk."""

__version__ = "0.1.0"
