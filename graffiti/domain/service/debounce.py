"""Cancellable, replaceable debounce timer."""

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class DebounceTimer(Generic[T]):
    """Fires ``action`` with the latest pushed value after a quiet period.

    Each ``push`` replaces the buffered value and restarts the countdown
    (last write wins). ``cancel`` drops the buffered value; a cancelled
    timer never fires.
    """

    def __init__(self, delay: float, action: Callable[[T], None]) -> None:
        self.delay = delay
        self._action = action
        self._task: asyncio.Task[None] | None = None
        self._value: T | None = None

    @property
    def pending(self) -> bool:
        """Whether a value is buffered and waiting to fire."""
        return self._task is not None and not self._task.done()

    def push(self, value: T) -> None:
        """Buffer ``value`` and restart the countdown."""
        self.cancel()
        self._value = value
        self._task = asyncio.create_task(self._fire_later())

    def cancel(self) -> bool:
        """Drop any buffered value. Returns True if one was pending."""
        was_pending = self.pending
        if self._task is not None:
            self._task.cancel()
        self._task = None
        self._value = None
        return was_pending

    async def _fire_later(self) -> None:
        await asyncio.sleep(self.delay)
        value = self._value
        self._task = None
        self._value = None
        self._action(value)
