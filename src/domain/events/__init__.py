"""Domain events package.

Usage:
    from src.domain.events import RouteAccessDenied, UserLoginSucceeded
"""

from src.domain.events.auth_events import (
    UserLoggedOut,
    UserLoginAttempted,
    UserLoginFailed,
    UserLoginSucceeded,
)
from src.domain.events.authorization_events import PermissionDenied, RouteAccessDenied
from src.domain.events.base_event import DomainEvent

__all__ = [
    "DomainEvent",
    "PermissionDenied",
    "RouteAccessDenied",
    "UserLoggedOut",
    "UserLoginAttempted",
    "UserLoginFailed",
    "UserLoginSucceeded",
]
