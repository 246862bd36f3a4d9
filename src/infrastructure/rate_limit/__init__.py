"""Rate limit infrastructure adapters."""

from src.infrastructure.rate_limit.login_rate_limiter import LoginRateLimiter

__all__ = ["LoginRateLimiter"]
