"""Recursive text search across Excel workbooks."""

__version__ = "0.1.0"
