"""Rate limit check result value object.

Usage:
    result = rate_limiter.check(email)
    if not result.allowed:
        retry_minutes = result.retry_after_minutes
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitResult:
    """Outcome of a login rate limit check.

    Attributes:
        allowed: Whether another attempt may be made now.
        retry_after_seconds: Seconds until the lock expires (0 when allowed).

    Raises:
        ValueError: If retry_after_seconds is negative.
    """

    allowed: bool
    retry_after_seconds: float = 0.0

    def __post_init__(self) -> None:
        if self.retry_after_seconds < 0:
            raise ValueError(
                f"retry_after_seconds must be non-negative, got {self.retry_after_seconds}"
            )

    @property
    def retry_after_minutes(self) -> int:
        """Whole minutes until retry, rounded up."""
        return math.ceil(self.retry_after_seconds / 60)

    @property
    def retry_after_header(self) -> str:
        """Value for the Retry-After response header (whole seconds)."""
        return str(math.ceil(self.retry_after_seconds))
