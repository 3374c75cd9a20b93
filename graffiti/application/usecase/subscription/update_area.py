"""Move live subscription use case."""

from pydantic import BaseModel

from graffiti.application.usecase.base import (
    BaseUseCase,
    parse_subscription_id,
    parse_viewport,
)
from graffiti.domain.model.subscription import SubscriptionState
from graffiti.domain.service import SubscriptionHub


class UpdateSubscriptionAreaRequest(BaseModel):
    """Viewport move request."""

    subscription_id: str
    lat: float
    lng: float
    lat_delta: float
    lng_delta: float


class UpdateSubscriptionAreaResponse(BaseModel):
    """Viewport move response."""

    subscription_id: str
    state: SubscriptionState


class UpdateSubscriptionAreaUseCase(BaseUseCase):
    """Use case for moving a subscription's viewport (debounced)."""

    def __init__(self, hub: SubscriptionHub) -> None:
        """Initialize update area use case.

        Args:
            hub: Subscription hub
        """
        self.hub = hub

    async def execute(
        self, request: UpdateSubscriptionAreaRequest
    ) -> UpdateSubscriptionAreaResponse:
        """Buffer the move.

        Raises:
            ValidationError: If the id or viewport is malformed
            NotFoundError: If the subscription is not open
        """
        subscription_id = parse_subscription_id(request.subscription_id)
        center, span = parse_viewport(
            request.lat, request.lng, request.lat_delta, request.lng_delta
        )
        await self.hub.update_area(subscription_id, center, span)
        return UpdateSubscriptionAreaResponse(
            subscription_id=str(subscription_id),
            state=self.hub.state_of(subscription_id),
        )
