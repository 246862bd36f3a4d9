"""Authenticate user handler.

Single responsibility: Verify user credentials.
Does NOT issue session tokens (the auth router does that).

Flow:
1. Emit UserLoginAttempted event
2. Check the login rate limiter for the submitted email
3. Find user by email
4. Check account exists
5. Check account active
6. Verify password
7. Check email verified
8. Reset the rate limiter, stamp last login
9. Emit UserLoginSucceeded event
10. Return Success(AuthenticatedUser)

On failure:
- Count the attempt (unknown email or wrong password)
- Emit UserLoginFailed event
- Return Failure(LoginRejection)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- NO infrastructure imports (collaborators are injected via protocols)
"""

from uuid import UUID

from src.application.commands.auth_commands import (
    AuthenticatedUser,
    AuthenticateUser,
    LoginRejection,
)
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError
from src.domain.events import UserLoginAttempted, UserLoginFailed, UserLoginSucceeded
from src.domain.protocols import (
    EventBusProtocol,
    LoginRateLimiterProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class AuthenticateUserHandler:
    """Handler for user authentication command.

    Follows hexagonal architecture:
    - Application layer (this handler)
    - Domain layer (User entity, protocols)
    - Infrastructure layer (repository, limiter, hashing via injection)
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        rate_limiter: LoginRateLimiterProtocol,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize authentication handler with dependencies.

        Args:
            user_repo: User repository for lookups.
            password_service: Password hashing/verification service.
            rate_limiter: Per-email login attempt limiter.
            event_bus: Event bus for publishing domain events.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._rate_limiter = rate_limiter
        self._event_bus = event_bus

    async def handle(
        self, cmd: AuthenticateUser
    ) -> Result[AuthenticatedUser, LoginRejection]:
        """Handle user authentication command.

        Args:
            cmd: AuthenticateUser command (email and password).

        Returns:
            Success(AuthenticatedUser) on successful authentication.
            Failure(LoginRejection) on failure.
        """
        email = cmd.email.strip().lower()

        # Step 1: Emit ATTEMPTED event
        await self._event_bus.publish(UserLoginAttempted(email=email))

        # Step 2: Rate limit (checked before any lookup)
        limit = self._rate_limiter.check(email)
        if not limit.allowed:
            await self._publish_failed_event(
                email=email, reason=AuthenticationError.TOO_MANY_ATTEMPTS
            )
            return Failure(
                error=LoginRejection(
                    reason=AuthenticationError.TOO_MANY_ATTEMPTS,
                    rate_limit=limit,
                )
            )

        # Steps 3-4: Find user
        user = await self._user_repo.find_by_email(email)
        if user is None:
            self._rate_limiter.increment(email)
            await self._publish_failed_event(
                email=email, reason=AuthenticationError.INVALID_CREDENTIALS
            )
            # Same reason as a wrong password to prevent user enumeration
            return Failure(
                error=LoginRejection(reason=AuthenticationError.INVALID_CREDENTIALS)
            )

        # Step 5: Check account active
        if not user.is_active:
            await self._publish_failed_event(
                email=email,
                reason=AuthenticationError.ACCOUNT_DISABLED,
                user_id=user.id,
            )
            return Failure(
                error=LoginRejection(reason=AuthenticationError.ACCOUNT_DISABLED)
            )

        # Step 6: Verify password
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            self._rate_limiter.increment(email)
            await self._publish_failed_event(
                email=email,
                reason=AuthenticationError.INVALID_CREDENTIALS,
                user_id=user.id,
            )
            return Failure(
                error=LoginRejection(reason=AuthenticationError.INVALID_CREDENTIALS)
            )

        # Step 7: Check email verified
        if not user.is_verified:
            await self._publish_failed_event(
                email=email,
                reason=AuthenticationError.EMAIL_NOT_VERIFIED,
                user_id=user.id,
            )
            return Failure(
                error=LoginRejection(reason=AuthenticationError.EMAIL_NOT_VERIFIED)
            )

        # Step 8: Clear attempts, stamp login
        self._rate_limiter.reset(email)
        user.record_login()
        await self._user_repo.save(user)

        # Step 9: Emit SUCCEEDED event
        await self._event_bus.publish(
            UserLoginSucceeded(user_id=user.id, email=user.email, role=user.role.value)
        )

        # Step 10: Return authenticated user data
        return Success(
            value=AuthenticatedUser(
                user_id=user.id,
                email=user.email,
                role=user.role,
                name=user.name,
            )
        )

    async def _publish_failed_event(
        self,
        *,
        email: str,
        reason: str,
        user_id: UUID | None = None,
    ) -> None:
        """Publish UserLoginFailed event.

        Args:
            email: Email address attempted.
            reason: Failure reason.
            user_id: User ID if the account exists.
        """
        await self._event_bus.publish(
            UserLoginFailed(email=email, reason=reason, user_id=user_id)
        )
