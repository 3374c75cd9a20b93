"""Create tag use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase
from graffiti.domain.model.tag import TagDraft
from graffiti.domain.service import RateLimiter, TagService


class CreateTagRequest(BaseModel):
    """Create tag request."""

    author_id: str  # Opaque caller identity
    lat: float
    lng: float
    content: dict[str, Any]  # {"kind": "text" | "strokes" | "external", ...}


class CreateTagResponse(BaseModel):
    """Create tag response."""

    tag_id: str


class CreateTagUseCase(BaseUseCase):
    """Use case for pinning new content to a location."""

    def __init__(self, tag_service: TagService, rate_limiter: RateLimiter) -> None:
        """Initialize create tag use case.

        Args:
            tag_service: Tag domain service
            rate_limiter: Creation rate limiter
        """
        self.tag_service = tag_service
        self.rate_limiter = rate_limiter

    async def execute(self, request: CreateTagRequest) -> CreateTagResponse:
        """Execute create tag flow.

        The rate limit is checked here before any validation work, and again
        atomically by the tag service right before the insert.

        Args:
            request: Create tag request

        Returns:
            ID of the new tag

        Raises:
            RateLimitedError: If the author is still cooling down
            ValidationError: If coordinates or content are malformed
        """
        with logfire.span("create_tag", author_id=request.author_id):
            self.rate_limiter.check(request.author_id)

            draft = TagDraft.create(
                author_id=request.author_id,
                lat=request.lat,
                lng=request.lng,
                content=request.content,
            )
            tag_id = await self.tag_service.create_tag(draft)

            return CreateTagResponse(tag_id=str(tag_id))
