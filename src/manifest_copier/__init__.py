"""Manifest-driven batch file copying with single-batch undo."""

__version__ = "0.1.0"
