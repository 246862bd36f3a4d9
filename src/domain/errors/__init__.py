"""Domain errors package.

Usage:
    from src.domain.errors import AuthenticationError, AuthorizationError
"""

from src.domain.errors.authentication_error import AuthenticationError
from src.domain.errors.authorization_error import AuthorizationError

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
]
