"""Componentizing HTML-tree to JSX converter."""

__version__ = "0.1.0"
