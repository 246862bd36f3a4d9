"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_permission_registry, ...

The container is organized into modules by concern:
- infrastructure: Core services (logging, hashing, tokens, rate limiting, users)
- events: Event bus and subscriptions
- authorization: Access policy, permission registry, request gate
- auth_handlers: Login/logout handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_logger,
    get_login_rate_limiter,
    get_password_service,
    get_token_service,
    get_user_repository,
)

# Event bus
from src.core.container.events import get_event_bus

# Authorization
from src.core.container.authorization import (
    get_access_policy,
    get_gate_config,
    get_permission_registry,
    get_request_gate,
    get_session_resolver,
)

# Auth handlers
from src.core.container.auth_handlers import (
    get_authenticate_user_handler,
    get_logout_user_handler,
)

__all__ = [
    # Infrastructure
    "get_logger",
    "get_login_rate_limiter",
    "get_password_service",
    "get_token_service",
    "get_user_repository",
    # Events
    "get_event_bus",
    # Authorization
    "get_access_policy",
    "get_gate_config",
    "get_permission_registry",
    "get_request_gate",
    "get_session_resolver",
    # Auth handlers
    "get_authenticate_user_handler",
    "get_logout_user_handler",
]
