"""Domain services."""

from .authorization import AuthorizationGuard
from .base import Service
from .cluster_engine import ClusterEngine
from .debounce import DebounceTimer
from .query_planner import QueryPlanner
from .rate_limiter import RateLimiter
from .subscription_hub import SubscriptionHub, UpdateCallback
from .tag_service import TagService
from .tag_store import TagEventListener, TagStore

__all__ = [
    "AuthorizationGuard",
    "ClusterEngine",
    "DebounceTimer",
    "QueryPlanner",
    "RateLimiter",
    "Service",
    "SubscriptionHub",
    "TagEventListener",
    "TagService",
    "TagStore",
    "UpdateCallback",
]
