"""User domain entity for authentication.

Pure business logic, no framework dependencies.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums import UserRole
from src.domain.value_objects.identity import Identity


@dataclass
class User:
    """Back-office user account.

    Business Rules:
        - Inactive accounts cannot log in
        - Email verification required before login
        - Accounts without an explicit role are VIEWERs

    Attributes:
        id: Unique user identifier.
        email: User email address (stored lower-case).
        password_hash: Bcrypt hashed password (never plaintext).
        name: Display name.
        role: Authority class used for authorization.
        is_active: Account active status (disabled users cannot log in).
        email_verified_at: When the email was verified (None if not yet).
        last_login_at: Timestamp of the last successful login.
        created_at: Timestamp when user was created.
    """

    id: UUID
    email: str
    password_hash: str
    name: str | None = None
    role: UserRole = UserRole.VIEWER
    is_active: bool = True
    email_verified_at: datetime | None = None
    last_login_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_verified(self) -> bool:
        """Whether the email address has been verified."""
        return self.email_verified_at is not None

    def record_login(self) -> None:
        """Stamp a successful login."""
        self.last_login_at = datetime.now(UTC)

    def to_identity(self) -> Identity:
        """Project the account onto the identity used by authorization."""
        return Identity(user_id=self.id, email=self.email, role=self.role)
