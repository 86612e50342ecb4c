"""Minimal screen-oriented terminal text viewer/editor."""

__version__ = "0.1.0"
