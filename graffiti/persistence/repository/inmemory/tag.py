"""In-memory implementation of Tag repository."""

from bisect import bisect_left, bisect_right, insort
from typing import Optional

from graffiti.domain.model.tag import Tag
from graffiti.domain.repository.tag import TagRepository
from graffiti.domain.value import TagId, VoteDirection


def _lat_key(entry: tuple[float, TagId]) -> float:
    return entry[0]


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository.

    Keeps a latitude-sorted index next to the id map so ``range_scan`` is a
    pair of binary searches instead of a full scan. None of the methods
    await between reading and writing, so each call is atomic on the event
    loop.
    """

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._tags: dict[TagId, Tag] = {}
        self._lat_index: list[tuple[float, TagId]] = []

    async def put(self, tag: Tag) -> Tag:
        """Store or replace a tag."""
        existing = self._tags.get(tag.id)
        if existing is not None:
            self._unindex(existing)
        self._tags[tag.id] = tag
        insort(self._lat_index, (tag.lat, tag.id))
        return tag

    async def get(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        return self._tags.get(tag_id)

    async def delete(self, tag_id: TagId) -> bool:
        """Delete a tag."""
        tag = self._tags.pop(tag_id, None)
        if tag is None:
            return False
        self._unindex(tag)
        return True

    async def range_scan(self, lat_min: float, lat_max: float) -> list[Tag]:
        """Find tags inside a latitude band."""
        lo = bisect_left(self._lat_index, lat_min, key=_lat_key)
        hi = bisect_right(self._lat_index, lat_max, key=_lat_key)
        return [self._tags[tag_id] for _, tag_id in self._lat_index[lo:hi]]

    async def increment(self, tag_id: TagId, direction: VoteDirection) -> Optional[Tag]:
        """Add one to a vote counter."""
        tag = self._tags.get(tag_id)
        if tag is None:
            return None

        field = direction.counter_field
        updated = tag.model_copy(update={field: getattr(tag, field) + 1})
        self._tags[tag_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._tags)

    def _unindex(self, tag: Tag) -> None:
        entry = (tag.lat, tag.id)
        pos = bisect_left(self._lat_index, entry)
        if pos < len(self._lat_index) and self._lat_index[pos] == entry:
            self._lat_index.pop(pos)
