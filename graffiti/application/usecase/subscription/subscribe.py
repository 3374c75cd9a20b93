"""Open live subscription use case."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase, parse_viewport
from graffiti.domain.service import SubscriptionHub


class SubscribeRequest(BaseModel):
    """Subscribe request.

    ``on_update`` receives a ``SubscriptionUpdate``; it may be a plain
    function or a coroutine function.
    """

    lat: float
    lng: float
    lat_delta: float
    lng_delta: float
    on_update: Callable[..., Any]


class SubscribeResponse(BaseModel):
    """Subscribe response."""

    subscription_id: str


class SubscribeUseCase(BaseUseCase):
    """Use case for opening a live viewport query."""

    def __init__(self, hub: SubscriptionHub) -> None:
        """Initialize subscribe use case.

        Args:
            hub: Subscription hub
        """
        self.hub = hub

    async def execute(self, request: SubscribeRequest) -> SubscribeResponse:
        """Open the subscription; the initial result is delivered before returning.

        Raises:
            ValidationError: If the viewport is malformed
            StoreUnavailableError: If the initial scan fails
        """
        center, span = parse_viewport(
            request.lat, request.lng, request.lat_delta, request.lng_delta
        )
        subscription_id = await self.hub.subscribe(center, span, request.on_update)
        return SubscribeResponse(subscription_id=str(subscription_id))
