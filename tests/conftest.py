"""Test configuration and fixtures."""

from typing import Any

import pytest
import pytest_asyncio

from graffiti.config import (
    ClusteringSettings,
    QuerySettings,
    RateLimitSettings,
    RetrySettings,
    SubscriptionSettings,
)
from graffiti.domain.model.tag import Tag, TagDraft
from graffiti.domain.service import (
    AuthorizationGuard,
    ClusterEngine,
    QueryPlanner,
    SubscriptionHub,
    TagStore,
)
from graffiti.persistence.repository.inmemory import InMemoryTagRepository

SF_LAT = 37.7749
SF_LNG = -122.4194


def make_draft(
    lat: float = SF_LAT,
    lng: float = SF_LNG,
    author_id: str = "alice",
    body: str = "hello",
    content: dict[str, Any] | None = None,
) -> TagDraft:
    """Build a valid draft, text content unless ``content`` is given."""
    return TagDraft.create(
        author_id=author_id,
        lat=lat,
        lng=lng,
        content=content or {"kind": "text", "body": body},
    )


async def no_sleep(_: float) -> None:
    """Backoff replacement that returns immediately."""
    return None


@pytest.fixture
def repository() -> InMemoryTagRepository:
    return InMemoryTagRepository()


@pytest.fixture
def store(repository: InMemoryTagRepository) -> TagStore:
    return TagStore(
        tag_repository=repository,
        guard=AuthorizationGuard(),
        retry=RetrySettings(attempts=3, base_delay_seconds=0.01),
        sleep=no_sleep,
    )


@pytest.fixture
def planner() -> QueryPlanner:
    return QueryPlanner(QuerySettings())


@pytest.fixture
def cluster_engine() -> ClusterEngine:
    return ClusterEngine(ClusteringSettings())


@pytest.fixture
def subscription_settings() -> SubscriptionSettings:
    # Short debounce keeps the suite fast; ordering semantics are unchanged
    return SubscriptionSettings(debounce_seconds=0.05, hysteresis_meters=150.0)


@pytest_asyncio.fixture
async def hub(
    store: TagStore,
    planner: QueryPlanner,
    cluster_engine: ClusterEngine,
    subscription_settings: SubscriptionSettings,
):
    hub = SubscriptionHub(
        tag_store=store,
        planner=planner,
        cluster_engine=cluster_engine,
        settings=subscription_settings,
    )
    await hub.start()
    yield hub
    await hub.shutdown()


@pytest.fixture
def rate_limit_settings() -> RateLimitSettings:
    return RateLimitSettings(min_interval_seconds=5.0, prune_threshold=100)


def tag_ids(items) -> list:
    """IDs of the single-tag display items, in order."""
    return [item.tag.id for item in items if item.type == "single"]


def find_tag(items, tag_id) -> Tag | None:
    return next(
        (item.tag for item in items if item.type == "single" and item.tag.id == tag_id),
        None,
    )


async def settle(hub: SubscriptionHub) -> None:
    """Wait until every open subscription has drained its work queue."""
    for sub in list(hub._subscriptions.values()):
        await sub.queue.join()
