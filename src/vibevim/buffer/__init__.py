"""Text storage for editor buffers."""

from .text_store import MissingPathError, Position, TextStore

__all__ = [
    "MissingPathError",
    "Position",
    "TextStore",
]
