"""Unit tests for geographic value objects."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from graffiti.domain.value import BoundingBox, Coordinate, Span, VoteDirection


class TestCoordinate:
    """Tests for haversine distance."""

    def test_distance_to_self_is_zero(self):
        point = Coordinate(lat=37.7749, lng=-122.4194)

        assert point.distance_to(point) == 0.0

    def test_one_degree_of_latitude(self):
        """About 111.2 km everywhere."""
        a = Coordinate(lat=10.0, lng=20.0)
        b = Coordinate(lat=11.0, lng=20.0)

        assert a.distance_to(b) == pytest.approx(111_195, rel=1e-3)

    def test_distance_is_symmetric(self):
        sf = Coordinate(lat=37.7749, lng=-122.4194)
        la = Coordinate(lat=34.0522, lng=-118.2437)

        assert sf.distance_to(la) == pytest.approx(la.distance_to(sf))
        assert sf.distance_to(la) == pytest.approx(559_000, rel=1e-2)

    def test_fifty_meter_step(self):
        a = Coordinate(lat=37.7749, lng=-122.4194)
        b = Coordinate(lat=37.7749 + 0.00045, lng=-122.4194)

        assert 45 < a.distance_to(b) < 55

    def test_out_of_range_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            Coordinate(lat=91, lng=0)


class TestSpan:
    def test_widest(self):
        assert Span(lat_delta=0.01, lng_delta=0.03).widest == 0.03

    @pytest.mark.parametrize("delta", [0, -0.1])
    def test_non_positive_is_rejected(self, delta):
        with pytest.raises(PydanticValidationError):
            Span(lat_delta=delta, lng_delta=0.1)


class TestBoundingBox:
    def test_contains_is_edge_inclusive(self):
        box = BoundingBox(min_lat=0, max_lat=1, min_lng=0, max_lng=1)

        assert box.contains(0, 0)
        assert box.contains(1, 1)
        assert not box.contains(1.0001, 0.5)
        assert not box.contains(0.5, -0.0001)

    def test_inverted_box_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            BoundingBox(min_lat=1, max_lat=0, min_lng=0, max_lng=1)

    def test_size(self):
        box = BoundingBox(min_lat=10, max_lat=12, min_lng=-4, max_lng=0)

        assert box.size == (2, 4)


def test_vote_direction_counter_field():
    assert VoteDirection.UP.counter_field == "upvotes"
    assert VoteDirection.DOWN.counter_field == "downvotes"
