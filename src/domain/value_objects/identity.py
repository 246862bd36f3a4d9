"""Authenticated identity value object.

The identity is what the session collaborator hands to the request gate:
who is calling and with which role. It is created per authentication event
and read-only afterwards.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import UserRole


@dataclass(frozen=True, slots=True, kw_only=True)
class Identity:
    """Resolved caller identity.

    Attributes:
        user_id: User's unique identifier.
        email: User's email address.
        role: User's role (fixed for the lifetime of the session).
    """

    user_id: UUID
    email: str
    role: UserRole

    def as_context_headers(self, pathname: str) -> dict[str, str]:
        """Build the downstream request headers for this identity.

        Args:
            pathname: Originally requested path.

        Returns:
            dict[str, str]: x-user-id, x-user-role, x-user-email, x-pathname.
        """
        return {
            "x-user-id": str(self.user_id),
            "x-user-role": self.role.value,
            "x-user-email": self.email,
            "x-pathname": pathname,
        }
