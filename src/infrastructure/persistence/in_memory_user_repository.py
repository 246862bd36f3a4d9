"""InMemoryUserRepository - process-local implementation of UserRepository.

Backs development, tests and single-node deployments that seed their
accounts at startup. Emails are matched case-insensitively.

Example:
    >>> repo = InMemoryUserRepository()
    >>> await repo.save(user)
    >>> await repo.find_by_email("Ops@Example.com")  # finds ops@example.com
"""

from collections.abc import Iterable
from uuid import UUID

from src.domain.entities.user import User


def _email_key(email: str) -> str:
    return email.strip().lower()


class InMemoryUserRepository:
    """Dictionary-backed user repository.

    This class does NOT inherit from UserRepository protocol (Protocol uses
    structural typing).
    """

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._by_id: dict[UUID, User] = {}
        self._id_by_email: dict[str, UUID] = {}
        for user in users:
            self._store(user)

    def __len__(self) -> int:
        return len(self._by_id)

    async def find_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def find_by_email(self, email: str) -> User | None:
        user_id = self._id_by_email.get(_email_key(email))
        if user_id is None:
            return None
        return self._by_id.get(user_id)

    async def save(self, user: User) -> None:
        """Create or replace a user.

        Raises:
            ValueError: If another user already holds the email.
        """
        self._store(user)

    def _store(self, user: User) -> None:
        key = _email_key(user.email)
        owner = self._id_by_email.get(key)
        if owner is not None and owner != user.id:
            raise ValueError(f"Email already registered: {key}")

        previous = self._by_id.get(user.id)
        if previous is not None:
            self._id_by_email.pop(_email_key(previous.email), None)

        self._by_id[user.id] = user
        self._id_by_email[key] = user.id
