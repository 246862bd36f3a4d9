"""Authorization dependency factories.

Application-scoped singletons for role-based access control:
- AccessPolicy (build-time tables from src/config/permissions.py)
- PermissionRegistry (shared by the gate, handler guards and UI context)
- Session resolver (session token -> Identity)
- RequestGate (per-request authentication and route authorization)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_logger, get_token_service

if TYPE_CHECKING:
    from src.application.services import GateConfig, PermissionRegistry, RequestGate
    from src.domain.protocols.session_resolver_protocol import (
        SessionResolverProtocol,
    )
    from src.domain.value_objects import AccessPolicy


@lru_cache()
def get_access_policy() -> "AccessPolicy":
    """Get the application's access policy."""
    from src.config.permissions import DEFAULT_ACCESS_POLICY

    return DEFAULT_ACCESS_POLICY


@lru_cache()
def get_permission_registry() -> "PermissionRegistry":
    """Get permission registry singleton (app-scoped).

    Usage:
        registry = get_permission_registry()
        registry.has_permission(role, Resource.CLIENTS, Action.DELETE)
    """
    from src.application.services import PermissionRegistry

    return PermissionRegistry(get_access_policy())


@lru_cache()
def get_session_resolver() -> "SessionResolverProtocol":
    """Get session resolver singleton (app-scoped)."""
    from src.infrastructure.security import TokenSessionResolver

    return TokenSessionResolver(token_service=get_token_service(), logger=get_logger())


@lru_cache()
def get_gate_config() -> "GateConfig":
    """Build the request gate configuration from settings and allowlists."""
    from src.application.services import GateConfig
    from src.config.permissions import (
        EXTERNAL_AUTH_PREFIXES,
        PUBLIC_EXACT_PATHS,
        PUBLIC_ROUTE_PREFIXES,
    )

    return GateConfig(
        public_prefixes=PUBLIC_ROUTE_PREFIXES,
        external_auth_prefixes=EXTERNAL_AUTH_PREFIXES,
        public_exact_paths=PUBLIC_EXACT_PATHS,
        unmatched_policy=settings.unmatched_route_policy,
        login_path=settings.login_path,
        landing_path=settings.default_landing_path,
        resolve_timeout_seconds=settings.session_resolve_timeout_seconds,
    )


@lru_cache()
def get_request_gate() -> "RequestGate":
    """Get request gate singleton (app-scoped)."""
    from src.application.services import RequestGate

    return RequestGate(
        registry=get_permission_registry(),
        session_resolver=get_session_resolver(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        config=get_gate_config(),
    )
