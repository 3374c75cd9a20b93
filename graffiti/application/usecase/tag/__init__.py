"""Tag use cases."""

from .create_tag import CreateTagRequest, CreateTagResponse, CreateTagUseCase
from .delete_tag import DeleteTagRequest, DeleteTagResponse, DeleteTagUseCase
from .get_tag import GetTagRequest, GetTagUseCase, TagResponse
from .query_tags import QueryTagsRequest, QueryTagsResponse, QueryTagsUseCase
from .vote_tag import VoteTagRequest, VoteTagResponse, VoteTagUseCase

__all__ = [
    "CreateTagRequest",
    "CreateTagResponse",
    "CreateTagUseCase",
    "DeleteTagRequest",
    "DeleteTagResponse",
    "DeleteTagUseCase",
    "GetTagRequest",
    "GetTagUseCase",
    "TagResponse",
    "QueryTagsRequest",
    "QueryTagsResponse",
    "QueryTagsUseCase",
    "VoteTagRequest",
    "VoteTagResponse",
    "VoteTagUseCase",
]
