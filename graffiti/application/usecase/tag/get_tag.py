"""Get tag use case."""

from datetime import datetime

from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase, parse_tag_id
from graffiti.domain.model.tag import Tag, TagContent
from graffiti.domain.service import TagService


class GetTagRequest(BaseModel):
    """Get tag request."""

    tag_id: str  # UUID string


class TagResponse(BaseModel):
    """Tag details."""

    tag_id: str
    author_id: str
    lat: float
    lng: float
    content: TagContent
    upvotes: int
    downvotes: int
    created_at: datetime

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagResponse":
        return cls(
            tag_id=str(tag.id),
            author_id=tag.author_id,
            lat=tag.lat,
            lng=tag.lng,
            content=tag.content,
            upvotes=tag.upvotes,
            downvotes=tag.downvotes,
            created_at=tag.created_at,
        )


class GetTagUseCase(BaseUseCase):
    """Use case for retrieving a single tag."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize get tag use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: GetTagRequest) -> TagResponse:
        """Execute get tag flow.

        Raises:
            ValidationError: If the tag id is malformed
            NotFoundError: If the tag does not exist
        """
        tag = await self.tag_service.get_tag(parse_tag_id(request.tag_id))
        return TagResponse.from_tag(tag)
