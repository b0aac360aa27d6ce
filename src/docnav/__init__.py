"""Sidebar navigation and pagination for documentation sites."""

__version__ = "0.1.0"
