"""Query plans, scan results and display items."""

from typing import Annotated, Literal, Union

from pydantic import Field

from graffiti.domain.model.common import DomainModel
from graffiti.domain.model.tag import Tag
from graffiti.domain.value import BoundingBox, Coordinate, Span


class QueryPlan(DomainModel):
    """Concrete predicate and result budget for a viewport."""

    center: Coordinate
    span: Span
    box: BoundingBox
    limit: int = Field(ge=1)


class ScanResult(DomainModel):
    """Tags inside a box, ordered by id.

    ``truncated`` is set when more tags matched than ``limit`` allowed, so
    the caller can tell the user to zoom in.
    """

    tags: list[Tag]
    truncated: bool = False


class SingleItem(DomainModel):
    """An individual pin."""

    type: Literal["single"] = "single"
    tag: Tag


class ClusterItem(DomainModel):
    """Aggregate marker standing in for several nearby tags."""

    type: Literal["cluster"] = "cluster"
    lat: float
    lng: float
    count: int = Field(ge=2)


DisplayItem = Annotated[Union[SingleItem, ClusterItem], Field(discriminator="type")]


class QueryResult(DomainModel):
    """Display-ready result of a one-shot query."""

    items: list[DisplayItem]
    truncated: bool
    tag_count: int = Field(ge=0)
