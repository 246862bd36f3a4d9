"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables (and an optional .env file in development).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- The permission matrix and route rules are NOT settings; they are build-time
  constants in src/config/permissions.py

Usage:
    from src.core.config import settings

    # Access config
    cookie_name = settings.session_cookie_name
    max_attempts = settings.login_max_attempts

    # Environment detection
    if settings.is_production:
        # Production-only behavior
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment
from src.domain.enums import UnmatchedRoutePolicy


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file (if present)
        3. Default values (only for non-sensitive config)

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="Transport Back Office",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL, used to build RFC 9457 problem type URIs",
    )

    # Security configuration
    secret_key: str = Field(
        description="Secret key for session token signing (at least 32 characters)",
    )
    session_cookie_name: str = Field(
        default="session",
        description="Name of the cookie carrying the session token",
    )
    session_expire_minutes: int = Field(
        default=30 * 24 * 60,
        description="Session token lifetime in minutes (default 30 days)",
    )
    bcrypt_rounds: int = Field(
        default=12,
        description="Number of bcrypt hashing rounds (10-14 recommended, 12 = ~300ms)",
    )

    # Login rate limiting (in-memory, per email)
    login_max_attempts: int = Field(
        default=5,
        description="Failed login attempts allowed per window before lockout",
    )
    login_window_seconds: int = Field(
        default=15 * 60,
        description="Login attempt window and lockout duration in seconds",
    )
    rate_limit_sweep_interval_seconds: int = Field(
        default=5 * 60,
        description="Interval between sweeps of stale rate limit entries",
    )
    rate_limit_entry_ttl_seconds: int = Field(
        default=60 * 60,
        description="Entries idle for longer than this are removed by the sweep",
    )

    # Request gate
    session_resolve_timeout_seconds: float = Field(
        default=2.0,
        description="Upper bound for session resolution; timeouts count as unauthenticated",
    )
    login_path: str = Field(
        default="/login",
        description="Where unauthenticated requests are redirected",
    )
    default_landing_path: str = Field(
        default="/dashboard",
        description="Where requests with an insufficient role are redirected",
    )
    unmatched_route_policy: UnmatchedRoutePolicy = Field(
        default=UnmatchedRoutePolicy.DENY,
        description="Authenticated paths matching no route rule: deny (default) or allow",
    )

    # Optional bootstrap account for the in-memory user store
    bootstrap_admin_email: str | None = Field(
        default=None,
        description="Email of a SUPER_ADMIN account created at startup (development)",
    )
    bootstrap_admin_password: str | None = Field(
        default=None,
        description="Password of the bootstrap SUPER_ADMIN account",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate the signing key is long enough for HS256.

        Args:
            v: Secret key.

        Returns:
            str: Validated secret key.

        Raises:
            ValueError: If the key is shorter than 32 characters.
        """
        if len(v) < 32:
            raise ValueError("secret_key must be at least 32 characters")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """
        Validate bcrypt rounds are within safe range.

        Args:
            v: Number of bcrypt rounds.

        Returns:
            int: Validated bcrypt rounds.

        Raises:
            ValueError: If rounds are not between 10 and 20.
        """
        if not 10 <= v <= 20:
            raise ValueError("bcrypt_rounds must be between 10 and 20")
        return v

    @field_validator(
        "login_max_attempts",
        "login_window_seconds",
        "rate_limit_sweep_interval_seconds",
        "rate_limit_entry_ttl_seconds",
        "session_expire_minutes",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative limits and durations."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("session_resolve_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("session_resolve_timeout_seconds must be positive")
        return v

    @field_validator("login_path", "default_landing_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """
        Require absolute paths for redirect targets.

        Args:
            v: Path string.

        Returns:
            str: Path without trailing slash (root is kept as "/").
        """
        if not v.startswith("/"):
            raise ValueError("redirect paths must start with '/'")
        return v.rstrip("/") or "/"

    @field_validator("api_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()  # type: ignore[call-arg]  # Pydantic Settings loads from env


# Global settings instance (singleton pattern)
settings = get_settings()
