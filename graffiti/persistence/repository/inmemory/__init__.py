"""In-memory repository implementations."""

from .tag import InMemoryTagRepository

__all__ = [
    "InMemoryTagRepository",
]
