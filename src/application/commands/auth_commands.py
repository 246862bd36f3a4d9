"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import UserRole
from src.domain.value_objects import RateLimitResult


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Authenticate user credentials.

    Single responsibility: verify credentials only. Issuing the session
    token is the caller's job.

    Attributes:
        email: Submitted email address.
        password: Submitted plaintext password.

    Example:
        >>> command = AuthenticateUser(email="ops@example.com", password="s3cret!")
        >>> result = await handler.handle(command)
        >>> # Returns Success(AuthenticatedUser) or Failure(LoginRejection)
    """

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class AuthenticatedUser:
    """Response from successful authentication.

    Attributes:
        user_id: User's unique identifier.
        email: User's email address (normalized).
        role: User's role, carried into the session token.
        name: Display name, if any.
    """

    user_id: UUID
    email: str
    role: UserRole
    name: str | None = None


@dataclass(frozen=True, kw_only=True)
class LoginRejection:
    """Why a login was refused.

    Attributes:
        reason: AuthenticationError constant.
        rate_limit: Refusing limiter result (TOO_MANY_ATTEMPTS only).
    """

    reason: str
    rate_limit: RateLimitResult | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """End the caller's session.

    Session tokens are stateless, so logging out clears the cookie and
    records the event.

    Attributes:
        user_id: User's unique identifier.
        email: User's email address.
    """

    user_id: UUID
    email: str
