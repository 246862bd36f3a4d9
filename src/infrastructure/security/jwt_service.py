"""JWT session token service (adapter).

Implements TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - 30-day session lifetime by default (configurable)
    - Unique JWT ID (jti) per token

Claims:
    sub    user id (UUID string)
    email  user email
    role   UserRole value
    iat    issued at (epoch seconds)
    exp    expires at (epoch seconds)
    jti    unique token id (UUIDv7)

Stateless: validation needs no storage lookup. The role is fixed for the
lifetime of the token; a role change takes effect on the next login.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.enums import UserRole
from src.domain.errors import AuthenticationError

_REQUIRED_CLAIMS = ["sub", "email", "role", "exp", "iat"]


class JWTService:
    """Session token generation and validation.

    Usage:
        from src.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.generate_session_token(
            user_id=user.id, email=user.email, role=user.role
        )
        result = token_service.validate_session_token(token)
    """

    def __init__(self, secret_key: str, expiration_minutes: int = 43200) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC-SHA256 signing. MUST be at
                least 32 bytes.
            expiration_minutes: Token lifetime in minutes (default: 30 days).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = "HS256"

    @property
    def expiration_seconds(self) -> int:
        """Token lifetime in seconds (cookie max-age)."""
        return self._expiration_minutes * 60

    def generate_session_token(
        self,
        user_id: UUID,
        email: str,
        role: UserRole,
    ) -> str:
        """Generate a signed session token.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_session_token(
            ...     user_id=uuid7(), email="ops@example.com", role=UserRole.OPERATOR
            ... )
            >>> len(token.split("."))
            3
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "email": email,
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_session_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate a session token and extract its claims.

        Signature, expiry and presence of the required claims are checked.
        The claim values themselves are checked by the session resolver.

        Returns:
            Success with the claims, or Failure with EXPIRED_TOKEN or
            INVALID_TOKEN.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        return Success(value=payload)
