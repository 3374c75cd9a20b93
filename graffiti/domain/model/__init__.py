"""Domain model entities."""

from graffiti.domain.model.event import TagEvent, TagEventKind
from graffiti.domain.model.query import (
    ClusterItem,
    DisplayItem,
    QueryPlan,
    QueryResult,
    ScanResult,
    SingleItem,
)
from graffiti.domain.model.subscription import SubscriptionState, SubscriptionUpdate
from graffiti.domain.model.tag import (
    ExternalContent,
    StrokesContent,
    Tag,
    TagContent,
    TagDraft,
    TextContent,
)

__all__ = [
    "Tag",
    "TagDraft",
    "TagContent",
    "TextContent",
    "StrokesContent",
    "ExternalContent",
    "TagEvent",
    "TagEventKind",
    "QueryPlan",
    "ScanResult",
    "SingleItem",
    "ClusterItem",
    "DisplayItem",
    "QueryResult",
    "SubscriptionState",
    "SubscriptionUpdate",
]
