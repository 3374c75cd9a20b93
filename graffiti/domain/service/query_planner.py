"""Query planning: viewport to bounding box and result budget."""

import logfire

from graffiti.config import QuerySettings
from graffiti.domain.model.query import QueryPlan
from graffiti.domain.value import BoundingBox, Coordinate, Span

from .base import Service


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class QueryPlanner(Service):
    """Turns a (center, span) viewport into a box predicate and a limit."""

    def __init__(self, settings: QuerySettings) -> None:
        """Initialize query planner.

        Args:
            settings: Box clamping and limit tier configuration
        """
        self.settings = settings

    def plan(self, center: Coordinate, span: Span) -> QueryPlan:
        """Plan the scan for a viewport.

        The box is center ± span/2 per axis, with each half-delta clamped to
        ``[min_half_delta, max_half_delta]`` and the edges clipped to valid
        coordinates. The limit tightens as the view widens.

        Args:
            center: Viewport center
            span: Viewport extent in degrees

        Returns:
            Concrete query plan
        """
        lat_half = _clamp(
            span.lat_delta / 2,
            self.settings.min_half_delta,
            self.settings.max_half_delta,
        )
        lng_half = _clamp(
            span.lng_delta / 2,
            self.settings.min_half_delta,
            self.settings.max_half_delta,
        )

        box = BoundingBox(
            min_lat=max(-90.0, center.lat - lat_half),
            max_lat=min(90.0, center.lat + lat_half),
            min_lng=max(-180.0, center.lng - lng_half),
            max_lng=min(180.0, center.lng + lng_half),
        )
        limit = self.limit_for(span)

        logfire.debug(
            "Query planned",
            lat=center.lat,
            lng=center.lng,
            lat_half=lat_half,
            lng_half=lng_half,
            limit=limit,
        )
        return QueryPlan(center=center, span=span, box=box, limit=limit)

    def limit_for(self, span: Span) -> int:
        """Result budget for a span; wider views get fewer results."""
        widest = span.widest
        for tier in self.settings.limit_tiers:
            if widest > tier.min_span:
                return tier.limit
        return self.settings.default_limit
