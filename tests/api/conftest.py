"""API test fixtures.

Every test gets a fresh application (create_app) with:
- an in-memory user store seeded with one verified account per role
- a login rate limiter with a small budget (3 attempts)
- a TestClient that does not follow redirects

Session tokens are issued with the container's token service, which is the
one the default session resolver validates against.
"""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from src.core.container import get_password_service, get_token_service
from src.domain.entities.user import User
from src.domain.enums import UserRole
from src.infrastructure.persistence import InMemoryUserRepository
from src.infrastructure.rate_limit import LoginRateLimiter
from src.main import create_app

PASSWORD = "SecurePass123!"


def email_for(role: UserRole) -> str:
    return f"{role.value.lower()}@example.com"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """One bcrypt hash shared by all seeded accounts."""
    return get_password_service().hash_password(PASSWORD)


@pytest.fixture
def users(password_hash) -> dict[UserRole, User]:
    return {
        role: User(
            id=uuid7(),
            email=email_for(role),
            password_hash=password_hash,
            name=role.value.title(),
            role=role,
            email_verified_at=datetime.now(UTC),
        )
        for role in UserRole
    }


@pytest.fixture
def user_repository(users) -> InMemoryUserRepository:
    return InMemoryUserRepository(users.values())


@pytest.fixture
def rate_limiter() -> LoginRateLimiter:
    return LoginRateLimiter(max_attempts=3, window_seconds=900)


@pytest.fixture
def app(user_repository, rate_limiter):
    return create_app(user_repository=user_repository, rate_limiter=rate_limiter)


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def issue_token(users):
    """Issue a session token for the seeded user of a role."""

    def _issue(role: UserRole) -> str:
        user = users[role]
        return get_token_service().generate_session_token(
            user_id=user.id, email=user.email, role=user.role
        )

    return _issue


@pytest.fixture
def auth_headers(issue_token):
    """Bearer Authorization header for a role."""

    def _headers(role: UserRole) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(role)}"}

    return _headers
