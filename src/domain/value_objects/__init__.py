"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.access_policy import (
    DEFAULT_ROLE_STYLE,
    AccessPolicy,
    Permission,
    PermissionMatrix,
    RouteRule,
)
from src.domain.value_objects.identity import Identity
from src.domain.value_objects.rate_limit_result import RateLimitResult

__all__ = [
    "AccessPolicy",
    "DEFAULT_ROLE_STYLE",
    "Identity",
    "Permission",
    "PermissionMatrix",
    "RateLimitResult",
    "RouteRule",
]
