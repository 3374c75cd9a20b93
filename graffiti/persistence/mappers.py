"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
rather than through an ORM mapping.
"""

from typing import Any, Dict
from uuid import UUID

from graffiti.domain.model.tag import Tag
from graffiti.domain.value import ClientId, TagId


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model.

    Args:
        row: Database row as dict

    Returns:
        Tag domain model
    """
    return Tag.model_validate(
        {
            "id": TagId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
            "author_id": ClientId(row["author_id"]),
            "lat": row["lat"],
            "lng": row["lng"],
            "content": row["content"],
            "upvotes": row["upvotes"],
            "downvotes": row["downvotes"],
            "created_at": row["created_at"],
        }
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict.

    Args:
        tag: Tag domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": tag.id,
        "author_id": tag.author_id,
        "lat": tag.lat,
        "lng": tag.lng,
        "kind": tag.kind.value,
        "content": tag.content.model_dump(mode="json"),
        "upvotes": tag.upvotes,
        "downvotes": tag.downvotes,
        "created_at": tag.created_at,
    }
