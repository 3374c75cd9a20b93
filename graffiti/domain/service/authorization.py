"""Authorization rules for tag mutations."""

import logfire

from graffiti.domain.error import ForbiddenError
from graffiti.domain.model.tag import Tag

from .base import Service


class AuthorizationGuard(Service):
    """Decides who may mutate a tag.

    Any identity may vote. Only the author may delete.
    """

    def can_delete(self, tag: Tag, requester_id: str) -> bool:
        """Deletion is restricted to the tag's author."""
        return tag.author_id == requester_id

    def ensure_can_delete(self, tag: Tag, requester_id: str) -> None:
        """Raise if ``requester_id`` may not delete ``tag``.

        Raises:
            ForbiddenError: If the requester is not the author
        """
        if not self.can_delete(tag, requester_id):
            logfire.warn(
                "Delete attempt by non-author",
                tag_id=str(tag.id),
                requester_id=requester_id,
            )
            raise ForbiddenError("tag", str(tag.id), requester_id)
