"""Security adapters (hashing, session tokens, session resolution)."""

from src.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.token_session_resolver import TokenSessionResolver

__all__ = [
    "BcryptPasswordService",
    "JWTService",
    "TokenSessionResolver",
]
