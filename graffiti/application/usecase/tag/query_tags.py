"""Query tags in a viewport use case."""

from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase, parse_viewport
from graffiti.domain.model.query import DisplayItem
from graffiti.domain.service import TagService


class QueryTagsRequest(BaseModel):
    """Viewport query request."""

    lat: float
    lng: float
    lat_delta: float
    lng_delta: float


class QueryTagsResponse(BaseModel):
    """Viewport query response.

    ``truncated`` tells the client more tags exist than were returned and
    it should zoom in.
    """

    items: list[DisplayItem]
    truncated: bool
    tag_count: int


class QueryTagsUseCase(BaseUseCase):
    """Use case for a one-shot bounding-box query."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize query tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: QueryTagsRequest) -> QueryTagsResponse:
        """Execute viewport query.

        Raises:
            ValidationError: If the viewport is malformed
            StoreUnavailableError: If the store stays unreachable after retries
        """
        center, span = parse_viewport(
            request.lat, request.lng, request.lat_delta, request.lng_delta
        )
        result = await self.tag_service.query(center, span)
        return QueryTagsResponse(
            items=result.items,
            truncated=result.truncated,
            tag_count=result.tag_count,
        )
