"""Tag routes."""

from typing import Any

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Response, status
from pydantic import BaseModel

from graffiti.application.usecase.tag import (
    CreateTagRequest,
    CreateTagResponse,
    CreateTagUseCase,
    DeleteTagRequest,
    DeleteTagUseCase,
    GetTagRequest,
    GetTagUseCase,
    QueryTagsRequest,
    QueryTagsResponse,
    QueryTagsUseCase,
    TagResponse,
    VoteTagRequest,
    VoteTagResponse,
    VoteTagUseCase,
)
from graffiti.domain.error import DomainError
from graffiti.domain.value import VoteDirection
from graffiti.interface.error import MissingClientIdError, to_http_exception

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


class CreateTagAPIRequest(BaseModel):
    """API request for creating a tag."""

    lat: float
    lng: float
    content: dict[str, Any]  # Validated by the domain so failures map to 400


class VoteAPIRequest(BaseModel):
    """API request for voting on a tag."""

    direction: VoteDirection = VoteDirection.UP


def _require_client_id(client_id: str | None) -> str:
    if not client_id or not client_id.strip():
        raise MissingClientIdError("X-Client-Id header is required")
    return client_id


@router.post("", response_model=CreateTagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: CreateTagAPIRequest,
    use_case: FromDishka[CreateTagUseCase],
    x_client_id: str | None = Header(default=None),
) -> CreateTagResponse:
    """Pin new content to a location.

    Raises:
        HTTPException: 400 on bad input, 429 with Retry-After when rate limited
    """
    try:
        author_id = _require_client_id(x_client_id)
        with logfire.span("api.create_tag", author_id=author_id):
            return await use_case.execute(
                CreateTagRequest(
                    author_id=author_id,
                    lat=request.lat,
                    lng=request.lng,
                    content=request.content,
                )
            )
    except MissingClientIdError as e:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("", response_model=QueryTagsResponse)
async def query_tags(
    lat: float,
    lng: float,
    lat_delta: float,
    lng_delta: float,
    use_case: FromDishka[QueryTagsUseCase],
) -> QueryTagsResponse:
    """Clustered tags for a viewport.

    Example:
        GET /tags?lat=37.7749&lng=-122.4194&lat_delta=0.02&lng_delta=0.02
    """
    with logfire.span("api.query_tags", lat=lat, lng=lng):
        try:
            return await use_case.execute(
                QueryTagsRequest(
                    lat=lat, lng=lng, lat_delta=lat_delta, lng_delta=lng_delta
                )
            )
        except DomainError as e:
            raise to_http_exception(e)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(tag_id: str, use_case: FromDishka[GetTagUseCase]) -> TagResponse:
    """Single tag details."""
    try:
        return await use_case.execute(GetTagRequest(tag_id=tag_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{tag_id}/vote", response_model=VoteTagResponse)
async def vote_tag(
    tag_id: str,
    use_case: FromDishka[VoteTagUseCase],
    request: VoteAPIRequest | None = None,
) -> VoteTagResponse:
    """Upvote (default) or downvote a tag. Votes need no identity."""
    direction = request.direction if request else VoteDirection.UP
    with logfire.span("api.vote_tag", tag_id=tag_id, direction=direction.value):
        try:
            return await use_case.execute(
                VoteTagRequest(tag_id=tag_id, direction=direction)
            )
        except DomainError as e:
            raise to_http_exception(e)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    use_case: FromDishka[DeleteTagUseCase],
    x_client_id: str | None = Header(default=None),
) -> Response:
    """Delete a tag. Only its author may do this.

    Raises:
        HTTPException: 401 without identity, 403 for non-authors, 404 if unknown
    """
    try:
        requester_id = _require_client_id(x_client_id)
        with logfire.span("api.delete_tag", tag_id=tag_id, requester_id=requester_id):
            await use_case.execute(
                DeleteTagRequest(tag_id=tag_id, requester_id=requester_id)
            )
    except MissingClientIdError as e:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except DomainError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
