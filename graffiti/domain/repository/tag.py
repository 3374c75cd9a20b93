"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from graffiti.domain.model.tag import Tag
from graffiti.domain.value import TagId, VoteDirection


class TagRepository(ABC):
    """Persisted-state boundary for tags.

    Any backend offering these operations with atomic single-record writes
    is sufficient. Implementations live in the persistence layer.
    Transient backend failures are raised as ``StoreUnavailableError``.
    """

    @abstractmethod
    async def put(self, tag: Tag) -> Tag:
        """Store a tag record, replacing any record with the same id.

        Args:
            tag: The tag to store

        Returns:
            The stored tag
        """
        pass

    @abstractmethod
    async def get(self, tag_id: TagId) -> Optional[Tag]:
        """Fetch a tag by ID.

        Args:
            tag_id: The tag's unique identifier

        Returns:
            The tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId) -> bool:
        """Remove a tag record.

        Args:
            tag_id: The tag ID to delete

        Returns:
            True if a record was removed, False if none existed
        """
        pass

    @abstractmethod
    async def range_scan(self, lat_min: float, lat_max: float) -> list[Tag]:
        """Fetch every tag whose latitude lies in ``[lat_min, lat_max]``.

        Longitude filtering is left to the caller.

        Args:
            lat_min: Inclusive lower latitude bound
            lat_max: Inclusive upper latitude bound

        Returns:
            Matching tags in no particular order
        """
        pass

    @abstractmethod
    async def increment(self, tag_id: TagId, direction: VoteDirection) -> Optional[Tag]:
        """Atomically add one to a vote counter.

        Must not lose updates under concurrent calls for the same tag.

        Args:
            tag_id: The tag ID
            direction: Which counter to increment

        Returns:
            The updated tag, or None if the tag does not exist
        """
        pass
