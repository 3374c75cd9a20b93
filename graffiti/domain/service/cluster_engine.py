"""Grid clustering of tags for zoomed-out map views."""

import math
from collections import defaultdict
from collections.abc import Sequence

from graffiti.config import ClusteringSettings
from graffiti.domain.model.query import ClusterItem, DisplayItem, SingleItem
from graffiti.domain.model.tag import Tag
from graffiti.domain.value import Span

from .base import Service

Cell = tuple[int, int]


class ClusterEngine(Service):
    """Groups nearby tags into display clusters.

    Output depends only on the set of input tags and the span: members are
    ordered by id before averaging and cells are emitted in index order.
    """

    def __init__(self, settings: ClusteringSettings) -> None:
        """Initialize cluster engine.

        Args:
            settings: Pass-through threshold and grid resolution
        """
        self.settings = settings

    def cluster(self, tags: Sequence[Tag], span: Span) -> list[DisplayItem]:
        """Convert tags into display items for a viewport.

        When zoomed in past ``passthrough_span`` every tag is its own pin.
        Otherwise the viewport is split into ``grid_divisions`` cells per
        axis; cells holding one tag emit it as a pin, busier cells emit one
        cluster at the members' mean position.

        Args:
            tags: Tags to display
            span: Viewport extent in degrees

        Returns:
            Display items in deterministic order
        """
        ordered = sorted(tags, key=lambda t: t.id)

        if span.widest < self.settings.passthrough_span:
            return [SingleItem(tag=tag) for tag in ordered]

        cells: dict[Cell, list[Tag]] = defaultdict(list)
        for tag in ordered:
            cells[self.cell_of(tag, span)].append(tag)

        items: list[DisplayItem] = []
        for cell in sorted(cells):
            members = cells[cell]
            if len(members) == 1:
                items.append(SingleItem(tag=members[0]))
                continue

            count = len(members)
            items.append(
                ClusterItem(
                    lat=math.fsum(m.lat for m in members) / count,
                    lng=math.fsum(m.lng for m in members) / count,
                    count=count,
                )
            )
        return items

    def cell_of(self, tag: Tag, span: Span) -> Cell:
        """Grid cell for a tag.

        ``round`` rounds halves to even, so boundary points always land in
        the same cell.
        """
        lat_cell = span.lat_delta / self.settings.grid_divisions
        lng_cell = span.lng_delta / self.settings.grid_divisions
        return (round(tag.lat / lat_cell), round(tag.lng / lng_cell))
