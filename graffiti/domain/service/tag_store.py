"""Authoritative tag store with mutation events."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TypeVar
from uuid import uuid4

import logfire

from graffiti.config import RetrySettings
from graffiti.domain.error import NotFoundError, StoreUnavailableError
from graffiti.domain.model.event import TagEvent, TagEventKind
from graffiti.domain.model.query import ScanResult
from graffiti.domain.model.tag import Tag, TagDraft
from graffiti.domain.repository import TagRepository
from graffiti.domain.value import BoundingBox, TagId, VoteDirection

from .authorization import AuthorizationGuard
from .base import Service

T = TypeVar("T")

TagEventListener = Callable[[TagEvent], None]


@dataclass
class _TagLock:
    """A per-tag lock and the number of coroutines holding or awaiting it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class TagStore(Service):
    """Mutation and read primitives over the tag repository.

    Writes to the same tag (counter increments, deletion) are serialized by
    a per-tag lock, and each completed write is announced to listeners while
    that lock is still held, so listeners see a tag's events in the order
    they were applied. Listeners must not block: they are called inline.
    A tag's lock exists only while a write to it is running or waiting.

    Reads retry transient backend failures with exponential backoff. Writes
    never retry, since creating or voting twice is not idempotent.
    """

    def __init__(
        self,
        tag_repository: TagRepository,
        guard: AuthorizationGuard,
        retry: RetrySettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize tag store.

        Args:
            tag_repository: Persisted-state boundary
            guard: Authorization rules for deletion
            retry: Backoff policy for read paths
            sleep: Awaitable delay (injectable for tests)
        """
        self.tag_repository = tag_repository
        self.guard = guard
        self.retry = retry
        self._sleep = sleep
        self._locks: dict[TagId, _TagLock] = {}
        self._listeners: list[TagEventListener] = []
        self._sequence = 0

    def add_listener(self, listener: TagEventListener) -> None:
        """Register a callable invoked after every completed mutation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TagEventListener) -> None:
        """Unregister a listener (no-op if unknown)."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def insert(self, draft: TagDraft) -> TagId:
        """Store a new tag.

        Args:
            draft: Validated tag input

        Returns:
            Identifier assigned to the new tag
        """
        tag = Tag.from_draft(TagId(uuid4()), draft)
        with logfire.span(
            "tag_store.insert",
            tag_id=str(tag.id),
            author_id=tag.author_id,
            kind=tag.kind.value,
        ):
            # A fresh id cannot be contended. No await separates the write
            # from the event, so it precedes any event for this tag.
            await self.tag_repository.put(tag)
            self._emit(TagEventKind.INSERTED, tag)
            logfire.info("Tag inserted", tag_id=str(tag.id), lat=tag.lat, lng=tag.lng)
            return tag.id

    async def increment_counter(self, tag_id: TagId, direction: VoteDirection) -> int:
        """Atomically add one to a vote counter.

        A vote racing a delete either lands before the delete or fails with
        ``NotFoundError``; it never resurrects the tag.

        Args:
            tag_id: Tag to vote on
            direction: Counter to increment

        Returns:
            The counter's new value

        Raises:
            NotFoundError: If the tag does not exist
        """
        with logfire.span(
            "tag_store.increment_counter",
            tag_id=str(tag_id),
            direction=direction.value,
        ):
            async with self._locked(tag_id):
                updated = await self.tag_repository.increment(tag_id, direction)
                if updated is None:
                    logfire.warn("Vote on non-existent tag", tag_id=str(tag_id))
                    raise NotFoundError("Tag", str(tag_id))
                self._emit(TagEventKind.UPDATED, updated)

            count = getattr(updated, direction.counter_field)
            logfire.info(
                "Tag counter incremented",
                tag_id=str(tag_id),
                direction=direction.value,
                count=count,
            )
            return count

    async def delete(self, tag_id: TagId, requester_id: str) -> Tag:
        """Remove a tag on behalf of its author.

        Args:
            tag_id: Tag to delete
            requester_id: Caller identity

        Returns:
            The removed tag

        Raises:
            NotFoundError: If the tag does not exist
            ForbiddenError: If the requester is not the author
        """
        with logfire.span(
            "tag_store.delete", tag_id=str(tag_id), requester_id=requester_id
        ):
            async with self._locked(tag_id):
                tag = await self.tag_repository.get(tag_id)
                if tag is None:
                    raise NotFoundError("Tag", str(tag_id))

                self.guard.ensure_can_delete(tag, requester_id)

                if not await self.tag_repository.delete(tag_id):
                    raise NotFoundError("Tag", str(tag_id))
                self._emit(TagEventKind.REMOVED, tag)

            logfire.info("Tag deleted", tag_id=str(tag_id))
            return tag

    async def get(self, tag_id: TagId) -> Tag:
        """Fetch one tag.

        Raises:
            NotFoundError: If the tag does not exist
        """
        tag = await self._read("get", lambda: self.tag_repository.get(tag_id))
        if tag is None:
            raise NotFoundError("Tag", str(tag_id))
        return tag

    async def scan(self, box: BoundingBox, limit: int) -> ScanResult:
        """Return the tags inside ``box``, ordered by id, at most ``limit``.

        Latitude is the primary filter, pushed down to the repository;
        longitude is filtered over the resulting candidates. Neither handles
        the antimeridian.

        Args:
            box: Query rectangle (edges inclusive)
            limit: Maximum number of tags to return

        Returns:
            Matching tags and whether more existed than were returned
        """
        with logfire.span(
            "tag_store.scan",
            min_lat=box.min_lat,
            max_lat=box.max_lat,
            min_lng=box.min_lng,
            max_lng=box.max_lng,
            limit=limit,
        ):
            candidates = await self._read(
                "range_scan",
                lambda: self.tag_repository.range_scan(box.min_lat, box.max_lat),
            )
            matches = sorted(
                (t for t in candidates if box.contains(t.lat, t.lng)),
                key=lambda t: t.id,
            )
            truncated = len(matches) > limit
            logfire.debug(
                "Scan complete",
                candidates=len(candidates),
                matches=len(matches),
                truncated=truncated,
            )
            return ScanResult(tags=matches[:limit], truncated=truncated)

    async def _read(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        """Run a read, retrying transient failures with bounded backoff."""
        attempt = 1
        while True:
            try:
                return await call()
            except StoreUnavailableError as e:
                if attempt >= self.retry.attempts:
                    logfire.error(
                        "Tag store read failed",
                        operation=operation,
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                delay = min(
                    self.retry.max_delay_seconds,
                    self.retry.base_delay_seconds * 2 ** (attempt - 1),
                )
                logfire.warn(
                    "Retrying tag store read",
                    operation=operation,
                    attempt=attempt,
                    delay=delay,
                    error=str(e),
                )
                await self._sleep(delay)
                attempt += 1

    @asynccontextmanager
    async def _locked(self, tag_id: TagId) -> AsyncIterator[None]:
        """Hold the tag's lock; the entry is dropped once nobody needs it."""
        entry = self._locks.get(tag_id)
        if entry is None:
            entry = self._locks[tag_id] = _TagLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[tag_id]

    def _emit(self, kind: TagEventKind, tag: Tag) -> None:
        self._sequence += 1
        event = TagEvent(kind=kind, tag=tag, sequence=self._sequence)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # The write already happened; a broken listener must not undo it
                logfire.exception(
                    "Tag event listener failed",
                    kind=kind.value,
                    tag_id=str(tag.id),
                )
