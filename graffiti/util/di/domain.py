"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from graffiti.config import (
    ClusteringSettings,
    QuerySettings,
    RateLimitSettings,
    RetrySettings,
    SubscriptionSettings,
)
from graffiti.domain.repository import TagRepository
from graffiti.domain.service import (
    AuthorizationGuard,
    ClusterEngine,
    QueryPlanner,
    RateLimiter,
    SubscriptionHub,
    TagService,
    TagStore,
)
from graffiti.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: the store owns per-tag locks and the
    event listener list, the hub owns live subscriptions and the rate
    limiter owns per-identity history, all of which must outlive a request.
    """

    scope = Scope.APP

    @provide
    def get_authorization_guard(self) -> AuthorizationGuard:
        """Provide authorization guard."""
        return AuthorizationGuard()

    @provide
    def get_query_planner(self, settings: QuerySettings) -> QueryPlanner:
        """Provide query planner."""
        return QueryPlanner(settings=settings)

    @provide
    def get_cluster_engine(self, settings: ClusteringSettings) -> ClusterEngine:
        """Provide cluster engine."""
        return ClusterEngine(settings=settings)

    @provide
    def get_rate_limiter(self, settings: RateLimitSettings) -> RateLimiter:
        """Provide rate limiter."""
        return RateLimiter(settings=settings)

    @provide
    def get_tag_store(
        self,
        tag_repository: TagRepository,
        guard: AuthorizationGuard,
        retry: RetrySettings,
    ) -> TagStore:
        """Provide tag store."""
        return TagStore(tag_repository=tag_repository, guard=guard, retry=retry)

    @provide
    async def get_subscription_hub(
        self,
        tag_store: TagStore,
        planner: QueryPlanner,
        cluster_engine: ClusterEngine,
        settings: SubscriptionSettings,
    ) -> AsyncIterator[SubscriptionHub]:
        """Provide the subscription hub, started for the container lifetime."""
        hub = SubscriptionHub(
            tag_store=tag_store,
            planner=planner,
            cluster_engine=cluster_engine,
            settings=settings,
        )
        await hub.start()
        try:
            yield hub
        finally:
            logfire.info("Shutting down subscription hub", active=hub.active_count)
            await hub.shutdown()

    @provide
    def get_tag_service(
        self,
        tag_store: TagStore,
        rate_limiter: RateLimiter,
        planner: QueryPlanner,
        cluster_engine: ClusterEngine,
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(
            tag_store=tag_store,
            rate_limiter=rate_limiter,
            planner=planner,
            cluster_engine=cluster_engine,
        )
