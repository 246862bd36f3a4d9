"""Handler-level authorization dependencies.

FastAPI dependencies guarding individual operations with the permission
matrix. The request gate only checks route prefixes; these guards check the
exact (resource, action) an endpoint performs, so they stay correct even
when a route rule is loosened.

Refusals raise 403 with the generic "Insufficient permissions" detail and
publish a PermissionDenied event for audit. The required permission is
never echoed to the caller.

Usage:
    @router.delete("/clients/{client_id}")
    async def delete_client(
        client_id: int,
        identity: Annotated[Identity, Depends(get_current_identity)],
        _: Annotated[None, Depends(require_permission(Resource.CLIENTS, Action.DELETE))],
    ):
        ...
"""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.application.services import PermissionRegistry
from src.application.services.permission_registry import (
    ActionInput,
    PermissionCheck,
    ResourceInput,
    RoleInput,
)
from src.core.container import get_event_bus, get_permission_registry
from src.domain.errors import AuthorizationError
from src.domain.events import PermissionDenied
from src.domain.protocols import EventBusProtocol
from src.domain.value_objects import Identity
from src.presentation.routers.api.middleware.auth_dependencies import (
    get_current_identity,
)


def _value(item: object) -> str:
    return str(item.value) if isinstance(item, Enum) else str(item)


def _format_check(resource: ResourceInput, action: ActionInput) -> str:
    return f"{_value(resource)}:{_value(action)}"


async def _deny(
    *,
    identity: Identity,
    request: Request,
    event_bus: EventBusProtocol,
    required: tuple[str, ...],
) -> None:
    await event_bus.publish(
        PermissionDenied(
            user_id=identity.user_id,
            email=identity.email,
            role=identity.role.value,
            permissions=required,
            path=request.url.path,
        )
    )
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=AuthorizationError.INSUFFICIENT_PERMISSIONS,
    )


def require_permission(
    resource: ResourceInput,
    action: ActionInput,
) -> Callable[..., Awaitable[None]]:
    """Create a dependency that requires one permission.

    Args:
        resource: Resource to check.
        action: Action to check.

    Returns:
        Dependency function that validates the caller holds the permission.

    Raises:
        HTTPException 401: If the caller is unauthenticated.
        HTTPException 403: If the caller's role lacks the permission.
    """

    async def permission_checker(
        request: Request,
        identity: Annotated[Identity, Depends(get_current_identity)],
        registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
        event_bus: Annotated[EventBusProtocol, Depends(get_event_bus)],
    ) -> None:
        if not registry.has_permission(identity.role, resource, action):
            await _deny(
                identity=identity,
                request=request,
                event_bus=event_bus,
                required=(_format_check(resource, action),),
            )

    return permission_checker


def require_any_permission(
    *permissions: PermissionCheck,
) -> Callable[..., Awaitable[None]]:
    """Create a dependency that requires at least one of the permissions.

    Usage:
        _: Annotated[None, Depends(require_any_permission(
            (Resource.INVOICES, Action.VIEW),
            (Resource.PAYMENTS, Action.VIEW),
        ))]

    Raises:
        HTTPException 403: If the caller holds none of them.
    """

    async def permission_checker(
        request: Request,
        identity: Annotated[Identity, Depends(get_current_identity)],
        registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
        event_bus: Annotated[EventBusProtocol, Depends(get_event_bus)],
    ) -> None:
        if not registry.has_any_permission(identity.role, permissions):
            await _deny(
                identity=identity,
                request=request,
                event_bus=event_bus,
                required=tuple(_format_check(r, a) for r, a in permissions),
            )

    return permission_checker


def require_all_permissions(
    *permissions: PermissionCheck,
) -> Callable[..., Awaitable[None]]:
    """Create a dependency that requires every listed permission.

    Raises:
        HTTPException 403: If the caller lacks any of them.
    """

    async def permission_checker(
        request: Request,
        identity: Annotated[Identity, Depends(get_current_identity)],
        registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
        event_bus: Annotated[EventBusProtocol, Depends(get_event_bus)],
    ) -> None:
        if not registry.has_all_permissions(identity.role, permissions):
            await _deny(
                identity=identity,
                request=request,
                event_bus=event_bus,
                required=tuple(_format_check(r, a) for r, a in permissions),
            )

    return permission_checker


def require_role(*roles: RoleInput) -> Callable[..., Awaitable[None]]:
    """Create a dependency that requires one of the given roles.

    Exact role comparison: there is no hierarchy, and SUPER_ADMIN passes
    only when listed.

    Raises:
        HTTPException 403: If the caller holds none of the roles.
    """

    async def role_checker(
        request: Request,
        identity: Annotated[Identity, Depends(get_current_identity)],
        event_bus: Annotated[EventBusProtocol, Depends(get_event_bus)],
    ) -> None:
        if identity.role not in roles:
            await _deny(
                identity=identity,
                request=request,
                event_bus=event_bus,
                required=tuple(
                    f"role:{_value(role)}" for role in roles
                ),
            )

    return role_checker
