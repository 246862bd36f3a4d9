"""Session resolver backed by signed session tokens.

Turns the session credential (cookie value or bearer token) into an
Identity by validating the token and its claims. Every defect (missing
token, bad signature, expiry, missing or malformed claim, unknown role)
resolves to None: the request gate then treats the caller as anonymous.
"""

from typing import Any
from uuid import UUID

from src.core.result import Failure, Success
from src.domain.enums import UserRole
from src.domain.protocols import LoggerProtocol, TokenGenerationProtocol
from src.domain.value_objects import Identity


class TokenSessionResolver:
    """Resolve session tokens to identities (SessionResolverProtocol)."""

    def __init__(
        self,
        token_service: TokenGenerationProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize resolver.

        Args:
            token_service: Validates session tokens.
            logger: Structured logger (debug-level rejection reasons).
        """
        self._token_service = token_service
        self._logger = logger

    async def resolve(self, session_token: str | None) -> Identity | None:
        """Resolve a session token.

        Args:
            session_token: Raw token, None when absent.

        Returns:
            Identity for a valid token, None otherwise.
        """
        if not session_token:
            return None

        match self._token_service.validate_session_token(session_token):
            case Success(value=claims):
                return self._identity_from_claims(claims)
            case Failure(error=error):
                self._logger.debug("session_token_rejected", reason=error)
                return None

    def _identity_from_claims(self, claims: dict[str, Any]) -> Identity | None:
        try:
            user_id = UUID(str(claims.get("sub")))
        except ValueError:
            self._logger.debug("session_token_rejected", reason="malformed_subject")
            return None

        role = claims.get("role")
        if not isinstance(role, str) or not UserRole.is_valid(role):
            self._logger.debug("session_token_rejected", reason="unknown_role")
            return None

        email = claims.get("email")
        if not isinstance(email, str) or not email:
            self._logger.debug("session_token_rejected", reason="missing_email")
            return None

        return Identity(user_id=user_id, email=email, role=UserRole(role))
