"""Authentication domain events.

Pattern: 3 events per workflow (ATTEMPTED -> SUCCEEDED/FAILED)
- *Attempted: Operation initiated (before business logic)
- *Succeeded: Operation completed successfully
- *Failed: Operation failed, with a machine-readable reason

Handlers:
- LoggingEventHandler: ALL events
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class UserLoginAttempted(DomainEvent):
    """Credentials login started.

    Attributes:
        email: Email address submitted.
    """

    email: str


@dataclass(frozen=True, kw_only=True)
class UserLoginSucceeded(DomainEvent):
    """Credentials login completed.

    Attributes:
        user_id: Authenticated user's ID.
        email: Authenticated user's email.
        role: Role value carried by the new session.
    """

    user_id: UUID
    email: str
    role: str


@dataclass(frozen=True, kw_only=True)
class UserLoginFailed(DomainEvent):
    """Credentials login refused.

    Attributes:
        email: Email address submitted.
        reason: Failure reason code (see AuthenticateUserHandler errors).
        user_id: User ID when the account exists, else None.
    """

    email: str
    reason: str
    user_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class UserLoggedOut(DomainEvent):
    """Session ended at the user's request.

    Attributes:
        user_id: ID of the user that logged out.
        email: Email of the user that logged out.
    """

    user_id: UUID
    email: str
