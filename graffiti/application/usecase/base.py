"""Base use case and request parsing helpers."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from graffiti.domain.error import ValidationError
from graffiti.domain.value import Coordinate, Span, SubscriptionId, TagId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_tag_id(value: str) -> TagId:
    """Parse a tag ID from its string form.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return TagId(UUID(value))
    except ValueError as e:
        raise ValidationError(f"Invalid tag id: {value}") from e


def parse_subscription_id(value: str) -> SubscriptionId:
    """Parse a subscription ID from its string form.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return SubscriptionId(UUID(value))
    except ValueError as e:
        raise ValidationError(f"Invalid subscription id: {value}") from e


def parse_viewport(
    lat: float, lng: float, lat_delta: float, lng_delta: float
) -> tuple[Coordinate, Span]:
    """Build a viewport center and span from raw numbers.

    Raises:
        ValidationError: If coordinates are out of range or a delta is not positive
    """
    try:
        return (
            Coordinate(lat=lat, lng=lng),
            Span(lat_delta=lat_delta, lng_delta=lng_delta),
        )
    except PydanticValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(messages) from e
