"""Event catalog with a hierarchical category taxonomy."""

__version__ = "0.1.0"
