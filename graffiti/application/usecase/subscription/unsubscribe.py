"""Close live subscription use case."""

from pydantic import BaseModel

from graffiti.application.usecase.base import BaseUseCase, parse_subscription_id
from graffiti.domain.service import SubscriptionHub


class UnsubscribeRequest(BaseModel):
    """Unsubscribe request."""

    subscription_id: str


class UnsubscribeResponse(BaseModel):
    """Unsubscribe response.

    ``closed`` is False when the subscription was already closed.
    """

    subscription_id: str
    closed: bool


class UnsubscribeUseCase(BaseUseCase):
    """Use case for closing a live subscription."""

    def __init__(self, hub: SubscriptionHub) -> None:
        self.hub = hub

    async def execute(self, request: UnsubscribeRequest) -> UnsubscribeResponse:
        subscription_id = parse_subscription_id(request.subscription_id)
        closed = await self.hub.unsubscribe(subscription_id)
        return UnsubscribeResponse(
            subscription_id=str(subscription_id), closed=closed
        )
