"""Trending ranking and feed assembly for the project showcase."""

__version__ = "0.1.0"
