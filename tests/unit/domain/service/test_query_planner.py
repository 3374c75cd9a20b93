"""Unit tests for QueryPlanner."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from graffiti.config import LimitTier, QuerySettings
from graffiti.domain.service import QueryPlanner
from graffiti.domain.value import Coordinate, Span
from tests.conftest import SF_LAT, SF_LNG


def _span(delta: float) -> Span:
    return Span(lat_delta=delta, lng_delta=delta)


class TestPlanBox:
    """Tests for the query rectangle."""

    def test_box_is_center_plus_minus_half_span(self, planner):
        """A mid-range span should produce center ± span/2."""
        plan = planner.plan(Coordinate(lat=SF_LAT, lng=SF_LNG), _span(0.02))

        assert plan.box.min_lat == pytest.approx(SF_LAT - 0.01)
        assert plan.box.max_lat == pytest.approx(SF_LAT + 0.01)
        assert plan.box.min_lng == pytest.approx(SF_LNG - 0.01)
        assert plan.box.max_lng == pytest.approx(SF_LNG + 0.01)

    def test_tiny_span_is_widened_to_minimum(self, planner):
        """Half-deltas below 0.005 degrees should be clamped up."""
        plan = planner.plan(Coordinate(lat=SF_LAT, lng=SF_LNG), _span(0.001))

        lat_size, lng_size = plan.box.size
        assert lat_size == pytest.approx(0.01)
        assert lng_size == pytest.approx(0.01)

    def test_huge_span_is_narrowed_to_maximum(self, planner):
        """Half-deltas above 0.2 degrees should be clamped down."""
        plan = planner.plan(Coordinate(lat=SF_LAT, lng=SF_LNG), _span(10.0))

        lat_size, lng_size = plan.box.size
        assert lat_size == pytest.approx(0.4)
        assert lng_size == pytest.approx(0.4)

    def test_axes_are_clamped_independently(self, planner):
        """A wide but short viewport keeps its aspect within the bounds."""
        plan = planner.plan(
            Coordinate(lat=SF_LAT, lng=SF_LNG), Span(lat_delta=0.04, lng_delta=1.0)
        )

        lat_size, lng_size = plan.box.size
        assert lat_size == pytest.approx(0.04)
        assert lng_size == pytest.approx(0.4)

    def test_box_is_clipped_at_the_pole(self, planner):
        """Edges should never leave the valid coordinate range."""
        plan = planner.plan(Coordinate(lat=89.9, lng=179.95), _span(0.2))

        assert plan.box.max_lat == 90.0
        assert plan.box.max_lng == 180.0
        assert plan.box.min_lat == pytest.approx(89.8)

    def test_plan_keeps_requested_center_and_span(self, planner):
        """The plan should remember what the caller asked for."""
        center = Coordinate(lat=SF_LAT, lng=SF_LNG)
        span = _span(0.001)

        plan = planner.plan(center, span)

        assert plan.center == center
        assert plan.span == span


class TestLimitTiers:
    """Tests for the result budget."""

    @pytest.mark.parametrize(
        "delta,expected",
        [(0.3, 60), (0.08, 90), (0.03, 120), (0.02, 160), (0.001, 160)],
    )
    def test_default_tiers(self, planner, delta, expected):
        """Default tiers: >0.1 → 60, >0.05 → 90, >0.02 → 120, else 160."""
        assert planner.limit_for(_span(delta)) == expected

    def test_limit_uses_widest_axis(self, planner):
        """A viewport that is wide in one axis only is still a wide view."""
        assert planner.limit_for(Span(lat_delta=0.001, lng_delta=0.5)) == 60

    def test_zooming_out_never_loosens_the_limit(self, planner):
        """The limit should be non-increasing as the span grows."""
        deltas = [0.001 * 1.2**i for i in range(40)]
        limits = [planner.limit_for(_span(d)) for d in deltas]

        assert all(a >= b for a, b in zip(limits, limits[1:]))

    def test_custom_tiers(self):
        """Recalibrated tiers should be honoured."""
        planner = QueryPlanner(
            QuerySettings(
                limit_tiers=[LimitTier(min_span=1.0, limit=10)], default_limit=20
            )
        )

        assert planner.limit_for(_span(2.0)) == 10
        assert planner.limit_for(_span(0.5)) == 20

    def test_tiers_that_loosen_when_zooming_out_are_rejected(self):
        """Settings must not allow a wider view to get more results."""
        with pytest.raises(PydanticValidationError):
            QuerySettings(
                limit_tiers=[
                    LimitTier(min_span=0.1, limit=200),
                    LimitTier(min_span=0.05, limit=90),
                ],
                default_limit=160,
            )

    def test_inverted_half_delta_bounds_are_rejected(self):
        """min_half_delta above max_half_delta is a configuration error."""
        with pytest.raises(PydanticValidationError):
            QuerySettings(min_half_delta=0.5, max_half_delta=0.2)
