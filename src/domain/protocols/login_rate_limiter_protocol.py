"""Login rate limiter protocol (port).

Fixed-window attempt counting per identifier (the submitted email) with a
lockout once the window's budget is used up.

Implementations:
    - LoginRateLimiter: in-memory, process-local (src/infrastructure/rate_limit)
"""

from typing import Protocol

from src.domain.value_objects.rate_limit_result import RateLimitResult


class LoginRateLimiterProtocol(Protocol):
    """Login attempt limiter."""

    def check(self, identifier: str) -> RateLimitResult:
        """Check whether identifier may attempt a login now."""
        ...

    def increment(self, identifier: str) -> None:
        """Record a failed attempt."""
        ...

    def reset(self, identifier: str) -> None:
        """Forget all attempts (after a successful login)."""
        ...
