"""User roles for RBAC authorization.

This enum defines the closed set of authority classes a back-office user
can hold. Roles are checked against the permission matrix and the route
rules by the PermissionRegistry.

Role Ordering (informal, by privilege):
    SUPER_ADMIN > ADMIN > MANAGER > ACCOUNTANT / OPERATOR > VIEWER

    - SUPER_ADMIN: Bypass role, satisfies every permission and route check
    - ADMIN: Full administration except a few destructive actions
    - MANAGER: Day-to-day operations lead
    - ACCOUNTANT: Invoices, payments and financial reports
    - OPERATOR: Services, loading orders and documents
    - VIEWER: Read-only access

The ordering is documentation only. Authorization never compares roles by
rank; it always consults the matrix (plus the SUPER_ADMIN bypass).

Usage:
    from src.domain.enums import UserRole

    if identity.role is UserRole.SUPER_ADMIN:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles for RBAC authorization.

    String Enum:
        Inherits from str so roles serialize directly into session token
        claims and the x-user-role request header. Values are upper-case to
        match the values stored for each user account.
    """

    SUPER_ADMIN = "SUPER_ADMIN"
    """Privileged bypass role.

    Hardcoded to satisfy every permission and every route check regardless
    of matrix contents. It is never denied because of a missing table entry.
    """

    ADMIN = "ADMIN"
    """Administrator with user, company and settings management."""

    MANAGER = "MANAGER"
    """Operations manager (services, clients, suppliers, approvals)."""

    ACCOUNTANT = "ACCOUNTANT"
    """Finance role (invoices, payments, reports)."""

    OPERATOR = "OPERATOR"
    """Field/dispatch role (services, loading orders, documents)."""

    VIEWER = "VIEWER"
    """Read-only role.

    Also the default role for accounts that carry no explicit role.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: Role values in declaration order.
        """
        return [role.value for role in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid role.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid role.
        """
        return value in cls.values()
