"""In-memory login rate limiter.

Fixed-window attempt counting per identifier (the lower-cased email):

    - A window opens with the first failed attempt.
    - Once ``max_attempts`` failures fall inside the window, the next check
      locks the identifier for ``window_seconds``.
    - A window that has elapsed without a lockout is discarded, so counting
      starts over.
    - A successful login resets the identifier.

A background sweep drops entries idle for longer than ``entry_ttl_seconds``.
State is process-local: each worker counts its own attempts.

Usage:
    limiter = LoginRateLimiter(max_attempts=5, window_seconds=900)
    await limiter.start()  # application lifespan
    result = limiter.check("ops@example.com")
    if not result.allowed:
        ...  # 429, Retry-After: result.retry_after_header
    await limiter.stop()
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.domain.protocols import LoggerProtocol
from src.domain.value_objects import RateLimitResult


@dataclass(slots=True)
class _AttemptWindow:
    attempts: int
    first_attempt: float
    last_attempt: float
    locked_until: float | None = None

    def is_locked(self, now: float) -> bool:
        return self.locked_until is not None and self.locked_until > now


class LoginRateLimiter:
    """Per-identifier login attempt limiter (LoginRateLimiterProtocol).

    Not thread-safe; all calls happen on the event loop.
    """

    def __init__(
        self,
        *,
        max_attempts: int = 5,
        window_seconds: float = 900.0,
        entry_ttl_seconds: float = 3600.0,
        sweep_interval_seconds: float = 300.0,
        logger: LoggerProtocol | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize limiter.

        Args:
            max_attempts: Failed attempts allowed per window.
            window_seconds: Window length, also the lockout length.
            entry_ttl_seconds: Idle time after which the sweep drops an entry.
            sweep_interval_seconds: Period of the background sweep.
            logger: Optional structured logger.
            clock: Monotonic time source in seconds.

        Raises:
            ValueError: If a limit is not positive.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        if window_seconds <= 0 or entry_ttl_seconds <= 0 or sweep_interval_seconds <= 0:
            raise ValueError("Rate limiter durations must be positive")

        self._max_attempts = max_attempts
        self._window_seconds = window_seconds
        self._entry_ttl_seconds = entry_ttl_seconds
        self._sweep_interval_seconds = sweep_interval_seconds
        self._logger = logger
        self._clock = clock
        self._entries: dict[str, _AttemptWindow] = {}
        self._sweep_task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def check(self, identifier: str) -> RateLimitResult:
        """Check whether identifier may attempt a login.

        Returns:
            RateLimitResult: allowed, or refused with the remaining lockout.
        """
        now = self._clock()
        entry = self._entries.get(identifier)
        if entry is None:
            return RateLimitResult(allowed=True)

        if entry.is_locked(now):
            return RateLimitResult(
                allowed=False, retry_after_seconds=entry.locked_until - now
            )

        if now - entry.first_attempt >= self._window_seconds:
            del self._entries[identifier]
            return RateLimitResult(allowed=True)

        if entry.attempts >= self._max_attempts:
            entry.locked_until = now + self._window_seconds
            if self._logger is not None:
                self._logger.warning(
                    "login_rate_limit_locked",
                    attempts=entry.attempts,
                    lockout_seconds=self._window_seconds,
                )
            return RateLimitResult(
                allowed=False, retry_after_seconds=self._window_seconds
            )

        return RateLimitResult(allowed=True)

    def increment(self, identifier: str) -> None:
        """Record a failed attempt, opening a new window when needed."""
        now = self._clock()
        entry = self._entries.get(identifier)
        if entry is None or (
            not entry.is_locked(now)
            and now - entry.first_attempt >= self._window_seconds
        ):
            self._entries[identifier] = _AttemptWindow(
                attempts=1, first_attempt=now, last_attempt=now
            )
            return
        entry.attempts += 1
        entry.last_attempt = now

    def reset(self, identifier: str) -> None:
        """Forget identifier (successful login)."""
        self._entries.pop(identifier, None)

    def sweep(self) -> int:
        """Drop idle, unlocked entries.

        Returns:
            int: Number of entries removed.
        """
        now = self._clock()
        cutoff = now - self._entry_ttl_seconds
        stale = [
            key
            for key, entry in self._entries.items()
            if entry.last_attempt < cutoff and not entry.is_locked(now)
        ]
        for key in stale:
            del self._entries[key]
        if stale and self._logger is not None:
            self._logger.debug("login_rate_limit_swept", removed=len(stale))
        return len(stale)

    async def start(self) -> None:
        """Start the periodic sweep (idempotent)."""
        if self._sweep_task is None or self._sweep_task.done():
            self._sweep_task = asyncio.create_task(self._sweep_forever())

    async def stop(self) -> None:
        """Cancel the periodic sweep."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def destroy(self) -> None:
        """Stop the sweep and clear all state."""
        await self.stop()
        self._entries.clear()

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval_seconds)
            self.sweep()
