"""Duo ladder scoring core."""

__version__ = "0.1.0"
