"""Tabrelay - point the active browser tab at a URL over HTTP."""

__version__ = "0.1.0"
