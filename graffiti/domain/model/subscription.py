"""Live subscription state and delivery payloads."""

from enum import Enum

from graffiti.domain.model.common import DomainModel
from graffiti.domain.model.query import DisplayItem
from graffiti.domain.value import SubscriptionId


class SubscriptionState(str, Enum):
    """Lifecycle of a live subscription.

    ACTIVE -> PAUSED (viewport move buffered) -> ACTIVE (re-evaluated)
    Any state -> CLOSED (terminal)
    """

    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"


class SubscriptionUpdate(DomainModel):
    """Payload handed to a subscriber's callback.

    ``error`` is set when re-evaluation failed; ``items`` then carries the
    last successfully delivered result.
    """

    subscription_id: SubscriptionId
    items: list[DisplayItem]
    truncated: bool
    error: str | None = None
