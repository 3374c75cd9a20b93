"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from graffiti.domain.repository.tag import TagRepository

__all__ = [
    "TagRepository",
]
