"""Live subscription use cases."""

from .subscribe import SubscribeRequest, SubscribeResponse, SubscribeUseCase
from .unsubscribe import UnsubscribeRequest, UnsubscribeResponse, UnsubscribeUseCase
from .update_area import (
    UpdateSubscriptionAreaRequest,
    UpdateSubscriptionAreaResponse,
    UpdateSubscriptionAreaUseCase,
)

__all__ = [
    "SubscribeRequest",
    "SubscribeResponse",
    "SubscribeUseCase",
    "UnsubscribeRequest",
    "UnsubscribeResponse",
    "UnsubscribeUseCase",
    "UpdateSubscriptionAreaRequest",
    "UpdateSubscriptionAreaResponse",
    "UpdateSubscriptionAreaUseCase",
]
