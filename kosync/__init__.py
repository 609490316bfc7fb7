"""KOReader reading progress sync server."""

__version__ = "1.0.0"
