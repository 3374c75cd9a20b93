"""Geographic and content value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules for coordinates, viewport spans and
stroke payloads.
"""

import math
import re
from enum import Enum

from pydantic import Field, field_validator, model_validator

from graffiti.domain.value.common import RootValueObject, ValueObject

EARTH_RADIUS_METERS = 6_371_008.8


class VoteDirection(str, Enum):
    """Counter a vote increments."""

    UP = "up"
    DOWN = "down"

    @property
    def counter_field(self) -> str:
        """Name of the tag attribute holding this counter."""
        return "upvotes" if self is VoteDirection.UP else "downvotes"


class ContentKind(str, Enum):
    """Payload variant of a tag."""

    TEXT = "text"
    STROKES = "strokes"
    EXTERNAL = "external"


class Coordinate(ValueObject):
    """A latitude/longitude pair in degrees."""

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)

    def distance_to(self, other: "Coordinate") -> float:
        """Great-circle distance in meters (haversine)."""
        phi1 = math.radians(self.lat)
        phi2 = math.radians(other.lat)
        d_phi = phi2 - phi1
        d_lambda = math.radians(other.lng - self.lng)

        a = (
            math.sin(d_phi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        )
        return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


class Span(ValueObject):
    """Viewport extent in degrees per axis."""

    lat_delta: float = Field(gt=0, le=180, allow_inf_nan=False)
    lng_delta: float = Field(gt=0, le=360, allow_inf_nan=False)

    @property
    def widest(self) -> float:
        """Larger of the two axis spans."""
        return max(self.lat_delta, self.lng_delta)


class BoundingBox(ValueObject):
    """Rectangle in latitude/longitude space used as a query predicate.

    Longitude wraparound at the antimeridian is not modelled: a box never
    spans from +179 to -179.
    """

    min_lat: float = Field(ge=-90, le=90)
    max_lat: float = Field(ge=-90, le=90)
    min_lng: float = Field(ge=-180, le=180)
    max_lng: float = Field(ge=-180, le=180)

    @model_validator(mode="after")
    def validate_ordering(self) -> "BoundingBox":
        """Ensure each axis is non-inverted."""
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must not exceed max_lat")
        if self.min_lng > self.max_lng:
            raise ValueError("min_lng must not exceed max_lng")
        return self

    @property
    def size(self) -> tuple[float, float]:
        """Extent of the box as (lat degrees, lng degrees)."""
        return (self.max_lat - self.min_lat, self.max_lng - self.min_lng)

    def contains_lat(self, lat: float) -> bool:
        """Primary (range-indexable) predicate."""
        return self.min_lat <= lat <= self.max_lat

    def contains_lng(self, lng: float) -> bool:
        """Secondary predicate applied over the latitude candidates."""
        return self.min_lng <= lng <= self.max_lng

    def contains(self, lat: float, lng: float) -> bool:
        """Whether a point lies inside the box (edges inclusive)."""
        return self.contains_lat(lat) and self.contains_lng(lng)


class ColorHex(RootValueObject[str]):
    """Stroke color as ``#RRGGBB`` or ``#RRGGBBAA``."""

    @field_validator("root")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate hex color format."""
        if not re.match(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$", v):
            raise ValueError("Color must be #RRGGBB or #RRGGBBAA")
        return v.upper()


class StrokePoint(ValueObject):
    """A 2D point in the drawing surface's coordinate space."""

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)


class Stroke(ValueObject):
    """One paint stroke. Opaque to the core beyond shape validation."""

    points: list[StrokePoint] = Field(min_length=1)
    color_hex: ColorHex
    width: float = Field(gt=0, allow_inf_nan=False)
