"""Domain enums for business logic.

This package contains enumerations used throughout the domain layer.
Enums are centralized here for discoverability and maintainability.

Available Enums:
    - UserRole: Authority classes (SUPER_ADMIN .. VIEWER)
    - Resource: Protected domain object categories
    - Action: Operation categories performed on resources
    - UnmatchedRoutePolicy: Gate behavior for paths with no route rule
"""

from src.domain.enums.permission import Action, Resource
from src.domain.enums.unmatched_route_policy import UnmatchedRoutePolicy
from src.domain.enums.user_role import UserRole

__all__ = [
    "Action",
    "Resource",
    "UnmatchedRoutePolicy",
    "UserRole",
]
