"""URL shortening service with an optional JSON snapshot store."""

__version__ = "1.0.0"
