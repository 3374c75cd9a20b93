"""Tag domain service."""

import logfire

from graffiti.domain.model.query import QueryResult
from graffiti.domain.model.tag import Tag, TagDraft
from graffiti.domain.value import Coordinate, Span, TagId, VoteDirection

from .base import Service
from .cluster_engine import ClusterEngine
from .query_planner import QueryPlanner
from .rate_limiter import RateLimiter
from .tag_store import TagStore


class TagService(Service):
    """Domain service for tag operations.

    Wraps the store with rate limiting on creation and with query planning
    and clustering on reads.
    """

    def __init__(
        self,
        tag_store: TagStore,
        rate_limiter: RateLimiter,
        planner: QueryPlanner,
        cluster_engine: ClusterEngine,
    ) -> None:
        """Initialize tag service.

        Args:
            tag_store: Authoritative tag store
            rate_limiter: Per-identity creation limiter
            planner: Viewport to query plan conversion
            cluster_engine: Display clustering
        """
        self.tag_store = tag_store
        self.rate_limiter = rate_limiter
        self.planner = planner
        self.cluster_engine = cluster_engine

    async def create_tag(self, draft: TagDraft) -> TagId:
        """Create a tag, recording the creation against the author's limit.

        Args:
            draft: Validated tag input

        Returns:
            New tag ID

        Raises:
            RateLimitedError: If the author created a tag too recently
        """
        recorded_at = self.rate_limiter.acquire(draft.author_id)
        try:
            return await self.tag_store.insert(draft)
        except Exception:
            # The creation did not proceed, so it must not cost a cooldown
            self.rate_limiter.release(draft.author_id, recorded_at)
            raise

    async def vote(self, tag_id: TagId, direction: VoteDirection) -> int:
        """Add an upvote or downvote.

        Returns:
            New value of the voted counter

        Raises:
            NotFoundError: If the tag does not exist
        """
        return await self.tag_store.increment_counter(tag_id, direction)

    async def delete_tag(self, tag_id: TagId, requester_id: str) -> Tag:
        """Delete a tag on behalf of its author."""
        return await self.tag_store.delete(tag_id, requester_id)

    async def get_tag(self, tag_id: TagId) -> Tag:
        """Get a single tag."""
        return await self.tag_store.get(tag_id)

    async def query(self, center: Coordinate, span: Span) -> QueryResult:
        """One-shot viewport query.

        Args:
            center: Viewport center
            span: Viewport extent

        Returns:
            Clustered display items for the viewport
        """
        plan = self.planner.plan(center, span)
        result = await self.tag_store.scan(plan.box, plan.limit)
        items = self.cluster_engine.cluster(result.tags, span)

        logfire.info(
            "Tags queried",
            lat=center.lat,
            lng=center.lng,
            tags=len(result.tags),
            items=len(items),
            truncated=result.truncated,
        )
        return QueryResult(
            items=items, truncated=result.truncated, tag_count=len(result.tags)
        )
