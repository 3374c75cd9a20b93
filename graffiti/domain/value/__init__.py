"""Domain value objects."""

from graffiti.domain.value.identifiers import ClientId, SubscriptionId, TagId
from graffiti.domain.value.types import (
    BoundingBox,
    ColorHex,
    ContentKind,
    Coordinate,
    Span,
    Stroke,
    StrokePoint,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "ClientId",
    "SubscriptionId",
    "TagId",
    # Types
    "BoundingBox",
    "ColorHex",
    "ContentKind",
    "Coordinate",
    "Span",
    "Stroke",
    "StrokePoint",
    "VoteDirection",
]
