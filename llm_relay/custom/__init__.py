"""Custom (OpenAI-compatible) vendor package."""

from .adapter import CustomAdapter

__all__ = ["CustomAdapter"]
