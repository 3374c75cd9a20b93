"""Vote on tag use case."""

from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase, parse_tag_id
from graffiti.domain.service import TagService
from graffiti.domain.value import VoteDirection


class VoteTagRequest(BaseModel):
    """Vote request."""

    tag_id: str  # UUID string
    direction: VoteDirection


class VoteTagResponse(BaseModel):
    """Vote response."""

    tag_id: str
    direction: VoteDirection
    count: int


class VoteTagUseCase(BaseUseCase):
    """Use case for upvoting or downvoting a tag.

    Any identity may vote; there is no per-voter deduplication.
    """

    def __init__(self, tag_service: TagService) -> None:
        """Initialize vote use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: VoteTagRequest) -> VoteTagResponse:
        """Execute vote flow.

        Raises:
            ValidationError: If the tag id is malformed
            NotFoundError: If the tag does not exist
        """
        tag_id = parse_tag_id(request.tag_id)
        count = await self.tag_service.vote(tag_id, request.direction)
        return VoteTagResponse(
            tag_id=str(tag_id), direction=request.direction, count=count
        )
