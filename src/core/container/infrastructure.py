"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Password hashing (bcrypt)
- Session tokens (JWT)
- Login rate limiting (in-memory)
- User storage (in-memory)

Tests reset a singleton with ``get_xxx.cache_clear()``.
"""

from datetime import UTC, datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.enums import Environment

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
    from src.domain.protocols.user_repository import UserRepository
    from src.infrastructure.rate_limit import LoginRateLimiter
    from src.infrastructure.security import JWTService


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


# ============================================================================
# Security (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with the configured cost factor.
    """
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> "JWTService":
    """Get session token service singleton (app-scoped).

    Returns JWTService with HMAC-SHA256 and the configured session lifetime.
    """
    from src.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.session_expire_minutes,
    )


# ============================================================================
# Login Rate Limiter (Application-Scoped)
# ============================================================================


@lru_cache()
def get_login_rate_limiter() -> "LoginRateLimiter":
    """Get login rate limiter singleton (app-scoped).

    The periodic sweep is started and stopped by the application lifespan.
    """
    from src.infrastructure.rate_limit import LoginRateLimiter

    return LoginRateLimiter(
        max_attempts=settings.login_max_attempts,
        window_seconds=settings.login_window_seconds,
        entry_ttl_seconds=settings.rate_limit_entry_ttl_seconds,
        sweep_interval_seconds=settings.rate_limit_sweep_interval_seconds,
        logger=get_logger(),
    )


# ============================================================================
# User Storage (Application-Scoped)
# ============================================================================


@lru_cache()
def get_user_repository() -> "UserRepository":
    """Get user repository singleton (app-scoped).

    Seeds a verified SUPER_ADMIN account when BOOTSTRAP_ADMIN_EMAIL and
    BOOTSTRAP_ADMIN_PASSWORD are both set.
    """
    from uuid_extensions import uuid7

    from src.domain.entities.user import User
    from src.domain.enums import UserRole
    from src.infrastructure.persistence import InMemoryUserRepository

    seed: list[User] = []

    if settings.bootstrap_admin_email and settings.bootstrap_admin_password:
        email = settings.bootstrap_admin_email.strip().lower()
        seed.append(
            User(
                id=uuid7(),
                email=email,
                password_hash=get_password_service().hash_password(
                    settings.bootstrap_admin_password
                ),
                name="Administrator",
                role=UserRole.SUPER_ADMIN,
                email_verified_at=datetime.now(UTC),
            )
        )
        get_logger().info("bootstrap_admin_seeded", email=email)

    return InMemoryUserRepository(seed)
