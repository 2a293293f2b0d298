"""Mooza hierarchical faceted musician search."""

__version__ = "1.0.0"
