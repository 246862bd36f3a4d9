"""Unit tests for InMemoryUserRepository and the User entity.

Tests cover:
- Lookup by id and by email (case-insensitive)
- Save creates and replaces; email changes re-index
- Duplicate email rejection
- User helpers (is_verified, record_login, to_identity)
"""

from datetime import UTC, datetime

import pytest
from uuid_extensions import uuid7

from src.domain.entities.user import User
from src.domain.enums import UserRole
from src.infrastructure.persistence import InMemoryUserRepository


def _user(email: str = "ops@example.com", **overrides) -> User:
    return User(id=uuid7(), email=email, password_hash="$2b$10$hash", **overrides)


@pytest.mark.unit
class TestInMemoryUserRepository:
    """Test repository operations."""

    async def test_find_by_email_is_case_insensitive(self):
        user = _user()
        repo = InMemoryUserRepository([user])

        assert await repo.find_by_email("OPS@Example.com ") is user
        assert await repo.find_by_id(user.id) is user

    async def test_missing_user(self):
        repo = InMemoryUserRepository()

        assert await repo.find_by_email("ghost@example.com") is None
        assert await repo.find_by_id(uuid7()) is None
        assert len(repo) == 0

    async def test_save_replaces_and_reindexes(self):
        user = _user()
        repo = InMemoryUserRepository([user])

        user.email = "lead@example.com"
        await repo.save(user)

        assert await repo.find_by_email("lead@example.com") is user
        assert await repo.find_by_email("ops@example.com") is None
        assert len(repo) == 1

    async def test_duplicate_email_rejected(self):
        repo = InMemoryUserRepository([_user()])

        with pytest.raises(ValueError, match="already registered"):
            await repo.save(_user(email="Ops@example.com"))

    def test_duplicate_seed_rejected(self):
        with pytest.raises(ValueError):
            InMemoryUserRepository([_user(), _user()])


@pytest.mark.unit
class TestUserEntity:
    """Test User helpers."""

    def test_defaults(self):
        user = _user()

        assert user.role is UserRole.VIEWER
        assert user.is_active is True
        assert user.is_verified is False
        assert user.last_login_at is None

    def test_record_login(self):
        user = _user(email_verified_at=datetime.now(UTC))

        user.record_login()

        assert user.is_verified is True
        assert user.last_login_at is not None

    def test_to_identity(self):
        user = _user(role=UserRole.MANAGER)

        identity = user.to_identity()

        assert identity.user_id == user.id
        assert identity.email == "ops@example.com"
        assert identity.role is UserRole.MANAGER
