"""Unit tests for AuthenticateUserHandler and LogoutUserHandler.

Tests cover:
- Successful authentication (rate limiter reset, last login stamped, events)
- Unknown email and wrong password (same reason, attempt counted)
- Disabled account and unverified email (attempt not counted)
- Rate limiter lockout checked before any lookup
- Email normalization
- Logout event publishing

Architecture:
- Unit tests with mocked collaborators (protocol-based)
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from src.application.commands import AuthenticateUser, LogoutUser
from src.application.commands.handlers import (
    AuthenticateUserHandler,
    LogoutUserHandler,
)
from src.core.result import Failure, Success
from src.domain.entities.user import User
from src.domain.enums import UserRole
from src.domain.errors import AuthenticationError
from src.domain.events import (
    UserLoggedOut,
    UserLoginAttempted,
    UserLoginFailed,
    UserLoginSucceeded,
)
from src.domain.value_objects import RateLimitResult


def _user(**overrides) -> User:
    values = {
        "id": uuid7(),
        "email": "ops@example.com",
        "password_hash": "$2b$10$hash",
        "name": "Ops Lead",
        "role": UserRole.OPERATOR,
        "is_active": True,
        "email_verified_at": datetime.now(UTC),
    }
    values.update(overrides)
    return User(**values)


@pytest.fixture
def user_repo():
    return AsyncMock()


@pytest.fixture
def password_service():
    service = Mock()
    service.verify_password.return_value = True
    return service


@pytest.fixture
def rate_limiter():
    limiter = Mock()
    limiter.check.return_value = RateLimitResult(allowed=True)
    return limiter


@pytest.fixture
def event_bus():
    return AsyncMock()


@pytest.fixture
def handler(user_repo, password_service, rate_limiter, event_bus):
    return AuthenticateUserHandler(
        user_repo=user_repo,
        password_service=password_service,
        rate_limiter=rate_limiter,
        event_bus=event_bus,
    )


def _published(event_bus) -> list:
    return [call.args[0] for call in event_bus.publish.call_args_list]


@pytest.mark.unit
class TestAuthenticateUserSuccess:
    """Test successful authentication."""

    async def test_returns_authenticated_user(self, handler, user_repo):
        # Arrange
        user = _user()
        user_repo.find_by_email.return_value = user

        # Act
        result = await handler.handle(
            AuthenticateUser(email="ops@example.com", password="correct")
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.user_id == user.id
        assert result.value.email == "ops@example.com"
        assert result.value.role is UserRole.OPERATOR
        assert result.value.name == "Ops Lead"

    async def test_resets_limiter_and_stamps_login(
        self, handler, user_repo, rate_limiter
    ):
        user = _user()
        user_repo.find_by_email.return_value = user

        await handler.handle(AuthenticateUser(email="ops@example.com", password="pw"))

        rate_limiter.reset.assert_called_once_with("ops@example.com")
        rate_limiter.increment.assert_not_called()
        assert user.last_login_at is not None
        user_repo.save.assert_awaited_once_with(user)

    async def test_publishes_attempted_and_succeeded(
        self, handler, user_repo, event_bus
    ):
        user = _user(role=UserRole.ACCOUNTANT)
        user_repo.find_by_email.return_value = user

        await handler.handle(AuthenticateUser(email="ops@example.com", password="pw"))

        events = _published(event_bus)
        assert [type(event) for event in events] == [
            UserLoginAttempted,
            UserLoginSucceeded,
        ]
        assert events[1].user_id == user.id
        assert events[1].role == "ACCOUNTANT"

    async def test_email_is_normalized(self, handler, user_repo, rate_limiter):
        user_repo.find_by_email.return_value = _user()

        await handler.handle(
            AuthenticateUser(email="  Ops@Example.COM ", password="pw")
        )

        user_repo.find_by_email.assert_awaited_once_with("ops@example.com")
        rate_limiter.check.assert_called_once_with("ops@example.com")


@pytest.mark.unit
class TestAuthenticateUserFailure:
    """Test refused logins."""

    async def test_unknown_email(self, handler, user_repo, rate_limiter, event_bus):
        # Arrange
        user_repo.find_by_email.return_value = None

        # Act
        result = await handler.handle(
            AuthenticateUser(email="ghost@example.com", password="pw")
        )

        # Assert
        assert isinstance(result, Failure)
        assert result.error.reason == AuthenticationError.INVALID_CREDENTIALS
        rate_limiter.increment.assert_called_once_with("ghost@example.com")
        failed = _published(event_bus)[-1]
        assert isinstance(failed, UserLoginFailed)
        assert failed.user_id is None

    async def test_wrong_password_has_same_reason(
        self, handler, user_repo, password_service, rate_limiter, event_bus
    ):
        user = _user()
        user_repo.find_by_email.return_value = user
        password_service.verify_password.return_value = False

        result = await handler.handle(
            AuthenticateUser(email="ops@example.com", password="wrong")
        )

        assert isinstance(result, Failure)
        assert result.error.reason == AuthenticationError.INVALID_CREDENTIALS
        rate_limiter.increment.assert_called_once_with("ops@example.com")
        assert _published(event_bus)[-1].user_id == user.id
        user_repo.save.assert_not_awaited()

    async def test_disabled_account(self, handler, user_repo, rate_limiter):
        user_repo.find_by_email.return_value = _user(is_active=False)

        result = await handler.handle(
            AuthenticateUser(email="ops@example.com", password="pw")
        )

        assert isinstance(result, Failure)
        assert result.error.reason == AuthenticationError.ACCOUNT_DISABLED
        rate_limiter.increment.assert_not_called()

    async def test_disabled_account_checked_before_password(
        self, handler, user_repo, password_service
    ):
        user_repo.find_by_email.return_value = _user(is_active=False)

        await handler.handle(AuthenticateUser(email="ops@example.com", password="pw"))

        password_service.verify_password.assert_not_called()

    async def test_unverified_email(self, handler, user_repo, event_bus):
        user_repo.find_by_email.return_value = _user(email_verified_at=None)

        result = await handler.handle(
            AuthenticateUser(email="ops@example.com", password="pw")
        )

        assert isinstance(result, Failure)
        assert result.error.reason == AuthenticationError.EMAIL_NOT_VERIFIED
        assert _published(event_bus)[-1].reason == AuthenticationError.EMAIL_NOT_VERIFIED

    async def test_locked_out_before_lookup(
        self, handler, user_repo, rate_limiter, event_bus
    ):
        # Arrange
        rate_limiter.check.return_value = RateLimitResult(
            allowed=False, retry_after_seconds=600.0
        )

        # Act
        result = await handler.handle(
            AuthenticateUser(email="ops@example.com", password="pw")
        )

        # Assert
        assert isinstance(result, Failure)
        assert result.error.reason == AuthenticationError.TOO_MANY_ATTEMPTS
        assert result.error.rate_limit.retry_after_seconds == 600.0
        assert result.error.rate_limit.retry_after_minutes == 10
        user_repo.find_by_email.assert_not_awaited()
        rate_limiter.increment.assert_not_called()
        assert [type(event) for event in _published(event_bus)] == [
            UserLoginAttempted,
            UserLoginFailed,
        ]


@pytest.mark.unit
class TestLogoutUserHandler:
    """Test logout."""

    async def test_publishes_logged_out(self):
        # Arrange
        event_bus = AsyncMock()
        handler = LogoutUserHandler(event_bus=event_bus)
        user_id = uuid7()

        # Act
        result = await handler.handle(LogoutUser(user_id=user_id, email="v@example.com"))

        # Assert
        assert isinstance(result, Success)
        assert result.value.message == "Successfully logged out."
        event = event_bus.publish.call_args[0][0]
        assert isinstance(event, UserLoggedOut)
        assert event.user_id == user_id
