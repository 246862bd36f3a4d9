"""Authentication handler dependency factories.

Request-scoped handler instances for the login and logout flows. Each
factory assembles a fresh handler from the app-scoped singletons, injected
through FastAPI Depends so tests can swap them with dependency_overrides.
"""

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_login_rate_limiter,
    get_password_service,
    get_user_repository,
)
from src.domain.protocols import (
    EventBusProtocol,
    LoginRateLimiterProtocol,
    PasswordHashingProtocol,
    UserRepository,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )
    from src.application.commands.handlers.logout_user_handler import LogoutUserHandler


async def get_authenticate_user_handler(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    password_service: Annotated[
        PasswordHashingProtocol, Depends(get_password_service)
    ],
    rate_limiter: Annotated[LoginRateLimiterProtocol, Depends(get_login_rate_limiter)],
    event_bus: Annotated[EventBusProtocol, Depends(get_event_bus)],
) -> "AuthenticateUserHandler":
    """Get AuthenticateUser command handler (request-scoped).

    Usage:
        # Presentation Layer (FastAPI endpoint)
        handler: AuthenticateUserHandler = Depends(get_authenticate_user_handler)
    """
    from src.application.commands.handlers.authenticate_user_handler import (
        AuthenticateUserHandler,
    )

    return AuthenticateUserHandler(
        user_repo=user_repo,
        password_service=password_service,
        rate_limiter=rate_limiter,
        event_bus=event_bus,
    )


async def get_logout_user_handler(
    event_bus: Annotated[EventBusProtocol, Depends(get_event_bus)],
) -> "LogoutUserHandler":
    """Get LogoutUser command handler (request-scoped)."""
    from src.application.commands.handlers.logout_user_handler import (
        LogoutUserHandler,
    )

    return LogoutUserHandler(event_bus=event_bus)
