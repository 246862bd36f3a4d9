"""Authentication domain errors.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from src.core.result import Failure
    from src.domain.errors import AuthenticationError

    result = handler.handle(AuthenticateUser(email=email, password=password))
    match result:
        case Failure(error=AuthenticationError.TOO_MANY_ATTEMPTS):
            ...
"""


class AuthenticationError:
    """Authentication error constants.

    These are NOT exceptions. They are reason codes carried by Failure
    results and by UserLoginFailed events.

    Error Categories:
        - Token errors: INVALID_TOKEN, EXPIRED_TOKEN, MALFORMED_TOKEN
        - Credential errors: INVALID_CREDENTIALS, EMAIL_NOT_VERIFIED,
          ACCOUNT_DISABLED, TOO_MANY_ATTEMPTS
    """

    # Token validation errors
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    MALFORMED_TOKEN = "malformed_token"

    # Credential validation errors
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    ACCOUNT_DISABLED = "account_disabled"
    TOO_MANY_ATTEMPTS = "too_many_attempts"

    MESSAGES: dict[str, str] = {
        INVALID_TOKEN: "Invalid session",
        EXPIRED_TOKEN: "Session expired",
        MALFORMED_TOKEN: "Invalid session",
        INVALID_CREDENTIALS: "Invalid email or password",
        EMAIL_NOT_VERIFIED: "Email not verified",
        ACCOUNT_DISABLED: "Account is disabled. Please contact support.",
        TOO_MANY_ATTEMPTS: "Too many login attempts",
    }

    @classmethod
    def message_for(cls, error: str) -> str:
        """User-facing message for a reason code."""
        return cls.MESSAGES.get(error, "Authentication failed")
