"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture. The relational adapter lives
outside this service; InMemoryUserRepository backs development and tests.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Returns:
            User if found, None otherwise.
        """
        ...

    async def save(self, user: User) -> None:
        """Create or replace a user."""
        ...
