"""Delete tag use case."""

from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase, parse_tag_id
from graffiti.domain.service import TagService


class DeleteTagRequest(BaseModel):
    """Delete tag request."""

    tag_id: str  # UUID string
    requester_id: str  # Caller identity


class DeleteTagResponse(BaseModel):
    """Delete tag response."""

    tag_id: str
    deleted: bool


class DeleteTagUseCase(BaseUseCase):
    """Use case for an author removing their own tag."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize delete tag use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: DeleteTagRequest) -> DeleteTagResponse:
        """Execute delete flow.

        Raises:
            ValidationError: If the tag id is malformed
            NotFoundError: If the tag does not exist
            ForbiddenError: If the requester is not the author
        """
        tag_id = parse_tag_id(request.tag_id)
        await self.tag_service.delete_tag(tag_id, request.requester_id)
        return DeleteTagResponse(tag_id=str(tag_id), deleted=True)
