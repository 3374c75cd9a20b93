"""Per-identity tag creation rate limiting."""

import threading
import time
from collections.abc import Callable

import logfire

from graffiti.config import RateLimitSettings
from graffiti.domain.error import RateLimitedError

from .base import Service


class RateLimiter(Service):
    """Enforces a minimum interval between successful creations per identity.

    Only creations that actually proceed are recorded. The check and the
    record happen under one lock, so two concurrent creates from the same
    identity can never both be allowed.
    """

    def __init__(
        self,
        settings: RateLimitSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize rate limiter.

        Args:
            settings: Minimum interval and pruning threshold
            clock: Monotonic seconds source (injectable for tests)
        """
        self.settings = settings
        self._clock = clock
        self._last_create_at: dict[str, float] = {}
        self._lock = threading.Lock()

    def remaining(self, identity: str) -> float:
        """Seconds until ``identity`` may create again (0 when allowed)."""
        with self._lock:
            return self._remaining(identity, self._clock())

    def check(self, identity: str) -> None:
        """Advisory check that does not record anything.

        Raises:
            RateLimitedError: If the identity is still cooling down
        """
        remaining = self.remaining(identity)
        if remaining > 0:
            raise RateLimitedError(identity, remaining)

    def allow(self, identity: str) -> bool:
        """Atomically check and, if allowed, record a creation."""
        remaining, _ = self._try_record(identity)
        return remaining == 0

    def acquire(self, identity: str) -> float:
        """Record a creation or fail with the remaining cooldown.

        Returns:
            The recorded timestamp, to hand back to ``release``

        Raises:
            RateLimitedError: If the identity is still cooling down
        """
        remaining, recorded_at = self._try_record(identity)
        if remaining > 0:
            logfire.info(
                "Tag creation rate limited", identity=identity, retry_after=remaining
            )
            raise RateLimitedError(identity, remaining)
        return recorded_at

    def release(self, identity: str, recorded_at: float) -> None:
        """Undo a recorded creation that did not go through.

        Only the entry written by the matching ``acquire`` is dropped; a
        newer record for the same identity is left alone. Dropping is
        enough because ``acquire`` only records once the previous
        cooldown has fully elapsed.
        """
        with self._lock:
            if self._last_create_at.get(identity) == recorded_at:
                del self._last_create_at[identity]
                logfire.debug("Rate limit record released", identity=identity)

    def _try_record(self, identity: str) -> tuple[float, float]:
        """Return the remaining cooldown and the time recorded (if allowed)."""
        with self._lock:
            now = self._clock()
            remaining = self._remaining(identity, now)
            if remaining > 0:
                return remaining, now

            self._last_create_at[identity] = now
            if len(self._last_create_at) > self.settings.prune_threshold:
                self._prune(now)
            return 0.0, now

    def _remaining(self, identity: str, now: float) -> float:
        last = self._last_create_at.get(identity)
        if last is None:
            return 0.0
        return max(0.0, self.settings.min_interval_seconds - (now - last))

    def _prune(self, now: float) -> None:
        """Drop identities whose cooldown has fully elapsed."""
        cutoff = now - self.settings.min_interval_seconds
        stale = [k for k, v in self._last_create_at.items() if v <= cutoff]
        for key in stale:
            del self._last_create_at[key]
        logfire.debug("Rate limiter pruned", removed=len(stale))
