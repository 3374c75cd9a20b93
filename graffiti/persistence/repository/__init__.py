"""Repository implementations."""

from .tag import PostgresTagRepository

__all__ = [
    "PostgresTagRepository",
]
