"""Mutation events emitted by the tag store."""

from enum import Enum

from pydantic import Field

from graffiti.domain.model.common import DomainModel
from graffiti.domain.model.tag import Tag


class TagEventKind(str, Enum):
    """What happened to the tag."""

    INSERTED = "inserted"
    UPDATED = "updated"  # Counter change only
    REMOVED = "removed"


class TagEvent(DomainModel):
    """A completed store mutation.

    ``tag`` is the record as it stood right after the mutation (for
    ``REMOVED``, the record that was deleted). ``sequence`` is assigned by
    the store in apply order, so consumers can tell which of two events
    happened first.
    """

    kind: TagEventKind
    tag: Tag
    sequence: int = Field(ge=1)
