"""Tag aggregate root.

A tag is a piece of content pinned to a coordinate: a short text note, a
set of paint strokes drawn in AR, or a reference to an externally hosted
asset. Identity, author, position and content are immutable; only the vote
counters change over a tag's lifetime.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from graffiti.domain.error import ValidationError
from graffiti.domain.model.common import DomainModel
from graffiti.domain.value import ClientId, ContentKind, Coordinate, Stroke, TagId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TextContent(DomainModel):
    """Plain text note."""

    kind: Literal["text"] = "text"
    body: str = Field(max_length=280)

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        """Reject blank notes."""
        v = v.strip()
        if not v:
            raise ValueError("Text tags require a non-empty body")
        return v


class StrokesContent(DomainModel):
    """Vector graffiti drawn in AR."""

    kind: Literal["strokes"] = "strokes"
    strokes: list[Stroke] = Field(min_length=1, max_length=500)


class ExternalContent(DomainModel):
    """Reference to an asset stored outside the tag store (image, model)."""

    kind: Literal["external"] = "external"
    asset_ref: str = Field(max_length=2048)

    @field_validator("asset_ref")
    @classmethod
    def validate_asset_ref(cls, v: str) -> str:
        """Reject blank asset references."""
        v = v.strip()
        if not v:
            raise ValueError("External tags require an asset reference")
        return v


TagContent = Annotated[
    Union[TextContent, StrokesContent, ExternalContent],
    Field(discriminator="kind"),
]


class TagDraft(DomainModel):
    """Validated input for a tag that has not been stored yet."""

    author_id: ClientId
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)
    content: TagContent

    @field_validator("author_id")
    @classmethod
    def validate_author(cls, v: str) -> str:
        """Caller identity must be present."""
        if not v or not v.strip():
            raise ValueError("author_id must be non-empty")
        return v

    @classmethod
    def create(
        cls,
        author_id: str,
        lat: float,
        lng: float,
        content: Mapping[str, Any] | TextContent | StrokesContent | ExternalContent,
    ) -> "TagDraft":
        """Validate raw input into a draft.

        Raises:
            ValidationError: If coordinates or the content payload are malformed
        """
        if not isinstance(content, Mapping):
            content = content.model_dump()
        try:
            return cls.model_validate(
                {"author_id": author_id, "lat": lat, "lng": lng, "content": content}
            )
        except PydanticValidationError as e:
            messages = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(messages) from e


class Tag(DomainModel):
    """Stored tag.

    Business rules:
    - upvotes/downvotes never go below zero and only increase
    - only the author may delete the tag
    """

    id: TagId
    author_id: ClientId
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)
    content: TagContent
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_draft(cls, tag_id: TagId, draft: TagDraft) -> "Tag":
        """Materialize a draft with a fresh identity and zeroed counters."""
        return cls(
            id=tag_id,
            author_id=draft.author_id,
            lat=draft.lat,
            lng=draft.lng,
            content=draft.content,
            upvotes=0,
            downvotes=0,
            created_at=_utcnow(),
        )

    @property
    def kind(self) -> ContentKind:
        """Content variant of this tag."""
        return ContentKind(self.content.kind)

    @property
    def location(self) -> Coordinate:
        """Tag position."""
        return Coordinate(lat=self.lat, lng=self.lng)
