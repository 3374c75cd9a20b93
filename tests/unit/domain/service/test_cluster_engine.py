"""Unit tests for ClusterEngine."""

import math
import random
from uuid import uuid4

import pytest

from graffiti.config import ClusteringSettings
from graffiti.domain.model.query import ClusterItem, SingleItem
from graffiti.domain.model.tag import Tag
from graffiti.domain.service import ClusterEngine
from graffiti.domain.value import Span, TagId
from tests.conftest import make_draft


def _tag(lat: float, lng: float) -> Tag:
    return Tag.from_draft(TagId(uuid4()), make_draft(lat=lat, lng=lng))


# 0.12 degree viewport → 0.01 degree cells with the default 12 divisions
WIDE = Span(lat_delta=0.12, lng_delta=0.12)


class TestPassThrough:
    """Tests for zoomed-in views."""

    def test_each_tag_is_its_own_pin(self, cluster_engine):
        """Below the pass-through span nothing is clustered."""
        tags = [_tag(37.7720, -122.4120), _tag(37.7720, -122.4120)]

        items = cluster_engine.cluster(tags, Span(lat_delta=0.005, lng_delta=0.005))

        assert len(items) == 2
        assert all(isinstance(item, SingleItem) for item in items)

    def test_pins_are_ordered_by_id(self, cluster_engine):
        """Pass-through output should be sorted by tag id."""
        tags = [_tag(37.77 + i * 0.0001, -122.41) for i in range(10)]

        items = cluster_engine.cluster(tags, Span(lat_delta=0.005, lng_delta=0.005))

        assert [item.tag.id for item in items] == sorted(t.id for t in tags)

    def test_empty_input(self, cluster_engine):
        """No tags means no items."""
        assert cluster_engine.cluster([], WIDE) == []


class TestGrid:
    """Tests for zoomed-out views."""

    def test_nearby_tags_form_a_cluster(self, cluster_engine):
        """Tags sharing a cell should collapse into one cluster."""
        a = _tag(37.7720, -122.4120)
        b = _tag(37.7722, -122.4122)

        items = cluster_engine.cluster([a, b], WIDE)

        assert len(items) == 1
        cluster = items[0]
        assert isinstance(cluster, ClusterItem)
        assert cluster.count == 2
        assert cluster.lat == pytest.approx(37.7721)
        assert cluster.lng == pytest.approx(-122.4121)

    def test_lone_tag_in_a_cell_stays_single(self, cluster_engine):
        """A cell with one member emits the tag itself."""
        a = _tag(37.7720, -122.4120)
        b = _tag(37.7722, -122.4122)
        far = _tag(37.8020, -122.4520)

        items = cluster_engine.cluster([a, b, far], WIDE)

        singles = [i for i in items if isinstance(i, SingleItem)]
        clusters = [i for i in items if isinstance(i, ClusterItem)]
        assert [s.tag.id for s in singles] == [far.id]
        assert [c.count for c in clusters] == [2]

    def test_cluster_mean_is_exact(self, cluster_engine):
        """The cluster position is the arithmetic mean of its members."""
        members = [_tag(37.7720 + i * 0.00001, -122.4120) for i in range(7)]

        (cluster,) = cluster_engine.cluster(members, WIDE)

        assert cluster.lat == math.fsum(t.lat for t in members) / 7
        assert cluster.count == 7

    def test_output_does_not_depend_on_input_order(self, cluster_engine):
        """Same set of tags in any order gives identical items."""
        tags = [
            _tag(37.70 + random.random() * 0.1, -122.45 + random.random() * 0.1)
            for _ in range(60)
        ]
        expected = cluster_engine.cluster(tags, WIDE)

        for _ in range(5):
            shuffled = tags[:]
            random.shuffle(shuffled)
            assert cluster_engine.cluster(shuffled, WIDE) == expected

    def test_counts_add_up(self, cluster_engine):
        """Every input tag is represented exactly once."""
        tags = [
            _tag(37.70 + random.random() * 0.1, -122.45 + random.random() * 0.1)
            for _ in range(40)
        ]

        items = cluster_engine.cluster(tags, WIDE)

        total = sum(
            item.count if isinstance(item, ClusterItem) else 1 for item in items
        )
        assert total == 40

    def test_cells_follow_each_axis_span(self):
        """Cell size is derived per axis from the viewport span."""
        engine = ClusterEngine(ClusteringSettings(grid_divisions=10))
        tag = _tag(10.0, 20.0)

        # 1 degree lat / 10 → 0.1; 2 degrees lng / 10 → 0.2
        assert engine.cell_of(tag, Span(lat_delta=1.0, lng_delta=2.0)) == (100, 100)

    def test_ties_round_half_to_even(self):
        """Points exactly between cells land deterministically."""
        engine = ClusterEngine(ClusteringSettings(grid_divisions=1))
        span = Span(lat_delta=1.0, lng_delta=1.0)

        assert engine.cell_of(_tag(0.5, 1.5), span) == (0, 2)
        assert engine.cell_of(_tag(2.5, -0.5), span) == (2, 0)
