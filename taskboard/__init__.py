"""Server-rendered task list application."""

__version__ = "0.1.0"
