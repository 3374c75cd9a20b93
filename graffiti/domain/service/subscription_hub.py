"""Live bounding-box subscriptions.

The hub keeps, per subscription, the set of tags it last delivered and
applies store mutation events to that set as they arrive. A subscriber is
called again only when what it would see actually changed.

Each subscription owns a FIFO work queue drained by a single worker task.
Mutation events and debounced viewport moves go through that queue, so one
subscriber always observes changes in the order the store applied them.
Different subscriptions make progress independently.
"""

import asyncio
import inspect
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from uuid import uuid4

import logfire

from graffiti.config import SubscriptionSettings
from graffiti.domain.error import NotFoundError, StoreUnavailableError
from graffiti.domain.model.event import TagEvent, TagEventKind
from graffiti.domain.model.query import DisplayItem, QueryPlan, ScanResult
from graffiti.domain.model.subscription import SubscriptionState, SubscriptionUpdate
from graffiti.domain.model.tag import Tag
from graffiti.domain.value import Coordinate, Span, SubscriptionId, TagId

from .base import Service
from .cluster_engine import ClusterEngine
from .debounce import DebounceTimer
from .query_planner import QueryPlanner
from .tag_store import TagStore

UpdateCallback = Callable[[SubscriptionUpdate], Awaitable[None] | None]


@dataclass(frozen=True)
class AreaChange:
    """A debounced viewport move waiting to be applied."""

    center: Coordinate
    span: Span


@dataclass(eq=False)
class LiveSubscription:
    """Hub-owned state of one subscription."""

    id: SubscriptionId
    plan: QueryPlan
    on_update: UpdateCallback
    debounce: DebounceTimer[AreaChange]
    state: SubscriptionState = SubscriptionState.ACTIVE
    delivered: dict[TagId, Tag] = field(default_factory=dict)
    truncated: bool = False
    last_items: list[DisplayItem] | None = None
    last_truncated: bool | None = None
    pending_moves: int = 0
    queue: asyncio.Queue = field(default_factory=asyncio.Queue)
    worker: asyncio.Task | None = None

    @property
    def query_center(self) -> Coordinate:
        """Center of the box currently being watched."""
        return self.plan.center

    def reset(self, plan: QueryPlan, result: ScanResult) -> None:
        """Replace the baseline with a fresh scan."""
        self.plan = plan
        self.delivered = {tag.id: tag for tag in result.tags}
        self.truncated = result.truncated


def _is_newer(candidate: Tag, held: Tag) -> bool:
    """Counters only grow, so a snapshot with lower counts is stale."""
    return candidate.upvotes >= held.upvotes and candidate.downvotes >= held.downvotes


class SubscriptionHub(Service):
    """Registers live queries and pushes result changes to subscribers.

    The hub is an explicit instance with a lifecycle: ``start`` attaches it
    to the tag store, ``shutdown`` closes every subscription and detaches.
    """

    def __init__(
        self,
        tag_store: TagStore,
        planner: QueryPlanner,
        cluster_engine: ClusterEngine,
        settings: SubscriptionSettings,
    ) -> None:
        """Initialize subscription hub.

        Args:
            tag_store: Source of scans and mutation events
            planner: Viewport to query plan conversion
            cluster_engine: Post-processing of delivered tags
            settings: Debounce and hysteresis configuration
        """
        self.tag_store = tag_store
        self.planner = planner
        self.cluster_engine = cluster_engine
        self.settings = settings
        self._subscriptions: dict[SubscriptionId, LiveSubscription] = {}
        self._workers: set[asyncio.Task] = set()
        self._running = False

    async def start(self) -> None:
        """Begin receiving store mutation events."""
        if self._running:
            return
        self.tag_store.add_listener(self._on_tag_event)
        self._running = True
        logfire.info("Subscription hub started")

    async def shutdown(self) -> None:
        """Close all subscriptions and stop receiving events."""
        if not self._running:
            return
        self._running = False
        self.tag_store.remove_listener(self._on_tag_event)

        subscriptions = list(self._subscriptions.values())
        self._subscriptions.clear()
        for sub in subscriptions:
            self._close(sub)

        workers = list(self._workers)
        for worker in workers:
            worker.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        logfire.info("Subscription hub stopped", closed=len(subscriptions))

    @property
    def active_count(self) -> int:
        """Number of open subscriptions."""
        return len(self._subscriptions)

    def state_of(self, subscription_id: SubscriptionId) -> SubscriptionState:
        """Lifecycle state of a subscription; unknown ids are CLOSED."""
        sub = self._subscriptions.get(subscription_id)
        return sub.state if sub else SubscriptionState.CLOSED

    async def subscribe(
        self, center: Coordinate, span: Span, on_update: UpdateCallback
    ) -> SubscriptionId:
        """Open a live query and deliver the current result before returning.

        Args:
            center: Viewport center
            span: Viewport extent
            on_update: Called with every changed result, sync or async

        Returns:
            Handle for area updates and unsubscribe

        Raises:
            StoreUnavailableError: If the initial scan fails
        """
        if not self._running:
            raise RuntimeError("Subscription hub is not running")

        plan = self.planner.plan(center, span)
        subscription_id = SubscriptionId(uuid4())

        with logfire.span(
            "subscription_hub.subscribe",
            subscription_id=str(subscription_id),
            lat=center.lat,
            lng=center.lng,
            limit=plan.limit,
        ):
            sub = LiveSubscription(
                id=subscription_id,
                plan=plan,
                on_update=on_update,
                debounce=DebounceTimer(
                    self.settings.debounce_seconds,
                    lambda change: self._queue_move(subscription_id, change),
                ),
            )
            # Registered before scanning so no event slips between the scan
            # and the worker start; queued events are re-applied on top.
            self._subscriptions[subscription_id] = sub
            try:
                result = await self.tag_store.scan(plan.box, plan.limit)
            except Exception:
                self._subscriptions.pop(subscription_id, None)
                raise

            sub.reset(plan, result)
            await self._deliver(sub)

            sub.worker = asyncio.create_task(self._run(sub))
            self._workers.add(sub.worker)
            sub.worker.add_done_callback(self._workers.discard)

            logfire.info(
                "Subscription opened",
                subscription_id=str(subscription_id),
                tags=len(result.tags),
                truncated=result.truncated,
            )
            return subscription_id

    async def update_area(
        self, subscription_id: SubscriptionId, center: Coordinate, span: Span
    ) -> None:
        """Buffer a viewport move; it is applied after a quiet period.

        A newer move replaces a buffered one.

        Raises:
            NotFoundError: If the subscription is unknown or closed
        """
        sub = self._subscriptions.get(subscription_id)
        if sub is None or sub.state is SubscriptionState.CLOSED:
            raise NotFoundError("Subscription", str(subscription_id))

        sub.state = SubscriptionState.PAUSED
        sub.debounce.push(AreaChange(center=center, span=span))
        logfire.debug(
            "Area change buffered",
            subscription_id=str(subscription_id),
            lat=center.lat,
            lng=center.lng,
        )

    async def unsubscribe(self, subscription_id: SubscriptionId) -> bool:
        """Close a subscription. Idempotent.

        A delivery already running may finish; none starts afterwards.

        Returns:
            True if the subscription was open
        """
        sub = self._subscriptions.pop(subscription_id, None)
        if sub is None:
            return False
        self._close(sub)
        logfire.info("Subscription closed", subscription_id=str(subscription_id))
        return True

    def _close(self, sub: LiveSubscription) -> None:
        sub.state = SubscriptionState.CLOSED
        sub.debounce.cancel()
        sub.queue.put_nowait(None)

    def _on_tag_event(self, event: TagEvent) -> None:
        """Store listener: fan the event out without blocking the writer."""
        for sub in list(self._subscriptions.values()):
            if sub.state is SubscriptionState.CLOSED:
                continue
            if (
                event.tag.id in sub.delivered
                or sub.plan.box.contains(event.tag.lat, event.tag.lng)
                or sub.pending_moves > 0
            ):
                sub.queue.put_nowait(event)

    def _queue_move(self, subscription_id: SubscriptionId, change: AreaChange) -> None:
        sub = self._subscriptions.get(subscription_id)
        if sub is None or sub.state is SubscriptionState.CLOSED:
            return
        sub.pending_moves += 1
        sub.queue.put_nowait(change)

    async def _run(self, sub: LiveSubscription) -> None:
        """Drain one subscription's queue in order."""
        while True:
            item = await sub.queue.get()
            try:
                if item is None or sub.state is SubscriptionState.CLOSED:
                    return
                if isinstance(item, AreaChange):
                    await self._apply_move(sub, item)
                else:
                    await self._apply_event(sub, item)
            except StoreUnavailableError as e:
                self._resume(sub)
                await self._deliver(sub, error=str(e))
            except Exception as e:
                logfire.exception(
                    "Subscription re-evaluation failed",
                    subscription_id=str(sub.id),
                )
                self._resume(sub)
                await self._deliver(sub, error=f"Re-evaluation failed: {e}")
            finally:
                sub.queue.task_done()

    def _resume(self, sub: LiveSubscription) -> None:
        """Return a paused subscription to ACTIVE once no move is outstanding."""
        if (
            sub.state is SubscriptionState.PAUSED
            and not sub.debounce.pending
            and sub.pending_moves == 0
        ):
            sub.state = SubscriptionState.ACTIVE

    async def _apply_event(self, sub: LiveSubscription, event: TagEvent) -> None:
        tag = event.tag
        held = sub.delivered.get(tag.id)

        if event.kind is TagEventKind.INSERTED:
            if not sub.plan.box.contains(tag.lat, tag.lng):
                return
            if held is not None and not _is_newer(tag, held):
                return
            sub.delivered[tag.id] = tag
            self._enforce_limit(sub)

        elif event.kind is TagEventKind.UPDATED:
            # Counter changes only matter for tags the subscriber can see
            if held is None or not _is_newer(tag, held):
                return
            sub.delivered[tag.id] = tag

        elif event.kind is TagEventKind.REMOVED:
            if held is None:
                return
            del sub.delivered[tag.id]
            if sub.truncated:
                # Backfill the freed slot from the store
                result = await self.tag_store.scan(sub.plan.box, sub.plan.limit)
                sub.reset(sub.plan, result)

        await self._deliver(sub)

    async def _apply_move(self, sub: LiveSubscription, change: AreaChange) -> None:
        # The move stays pending until the new baseline is installed, so
        # events arriving during the scan are queued and re-applied on top.
        try:
            plan = self.planner.plan(change.center, change.span)
            moved = sub.query_center.distance_to(change.center)
            same_query = plan.limit == sub.plan.limit and all(
                math.isclose(a, b, rel_tol=1e-9)
                for a, b in zip(plan.box.size, sub.plan.box.size)
            )
            if moved < self.settings.hysteresis_meters and same_query:
                logfire.debug(
                    "Area change below hysteresis, keeping current query",
                    subscription_id=str(sub.id),
                    moved_meters=moved,
                )
                # Same box, but clustering follows the new zoom
                sub.plan = sub.plan.model_copy(update={"span": plan.span})
            else:
                with logfire.span(
                    "subscription_hub.requery",
                    subscription_id=str(sub.id),
                    moved_meters=moved,
                    limit=plan.limit,
                ):
                    result = await self.tag_store.scan(plan.box, plan.limit)
                    sub.reset(plan, result)
        finally:
            sub.pending_moves -= 1

        self._resume(sub)
        await self._deliver(sub)

    def _enforce_limit(self, sub: LiveSubscription) -> None:
        """Keep the same tags a fresh scan would: lowest ids up to the limit."""
        if len(sub.delivered) <= sub.plan.limit:
            return
        keep = sorted(sub.delivered)[: sub.plan.limit]
        sub.delivered = {tag_id: sub.delivered[tag_id] for tag_id in keep}
        sub.truncated = True

    async def _deliver(self, sub: LiveSubscription, error: str | None = None) -> None:
        """Invoke the callback if the visible result changed (or on error)."""
        items = self.cluster_engine.cluster(
            list(sub.delivered.values()), sub.plan.span
        )
        unchanged = items == sub.last_items and sub.truncated == sub.last_truncated
        if error is None and unchanged:
            return
        if sub.state is SubscriptionState.CLOSED:
            return

        sub.last_items = items
        sub.last_truncated = sub.truncated
        update = SubscriptionUpdate(
            subscription_id=sub.id,
            items=items,
            truncated=sub.truncated,
            error=error,
        )
        try:
            result = sub.on_update(update)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logfire.exception(
                "Subscriber callback failed", subscription_id=str(sub.id)
            )
