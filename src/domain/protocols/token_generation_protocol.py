"""Session token protocol for domain layer.

Session tokens are self-contained signed tokens carrying the identity
(user id, email, role). Validation is stateless.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (JWTService)
"""

from typing import Any, Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.enums import UserRole


class TokenGenerationProtocol(Protocol):
    """Session token generation and validation interface.

    Usage:
        token = token_service.generate_session_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
        )

        match token_service.validate_session_token(token):
            case Success(value=claims):
                user_id = claims["sub"]
            case Failure(error=error):
                ...
    """

    def generate_session_token(
        self,
        user_id: UUID,
        email: str,
        role: UserRole,
    ) -> str:
        """Generate a signed session token.

        Args:
            user_id: User's unique identifier.
            email: User's email address.
            role: User's role.

        Returns:
            Encoded token string.
        """
        ...

    def validate_session_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate a session token and return its claims.

        Args:
            token: Encoded token string.

        Returns:
            Success with the claims dict, or Failure with an
            AuthenticationError constant.
        """
        ...
