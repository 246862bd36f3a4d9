"""Authentication dependencies.

FastAPI dependencies exposing the caller's identity to handlers.

The request gate resolves the identity once per request and stores it on
request.state.identity. Paths the gate lets through without resolution
(public and /api/auth paths) fall back to resolving the session token here.

Usage:
    @router.get("/protected")
    async def protected_route(
        identity: Annotated[Identity, Depends(get_current_identity)],
    ):
        return {"user_id": str(identity.user_id)}

    @router.get("/optional")
    async def optional_route(
        identity: Annotated[Identity | None, Depends(get_current_identity_optional)],
    ):
        ...
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.application.services import PermissionContext, PermissionRegistry
from src.core.container import get_permission_registry, get_session_resolver
from src.domain.errors import AuthorizationError
from src.domain.protocols import SessionResolverProtocol
from src.domain.value_objects import Identity
from src.presentation.api.middleware.request_gate_middleware import (
    extract_session_token,
)


async def get_current_identity_optional(
    request: Request,
    session_resolver: Annotated[
        SessionResolverProtocol, Depends(get_session_resolver)
    ],
) -> Identity | None:
    """Get the caller's identity, or None when unauthenticated.

    Args:
        request: Current request.
        session_resolver: Session resolver (injected).

    Returns:
        Identity set by the request gate, else the identity resolved from the
        request's session token, else None.
    """
    identity = getattr(request.state, "identity", None)
    if isinstance(identity, Identity):
        return identity
    return await session_resolver.resolve(extract_session_token(request))


async def get_current_identity(
    identity: Annotated[Identity | None, Depends(get_current_identity_optional)],
) -> Identity:
    """Get the caller's identity.

    Raises:
        HTTPException 401: If the request carries no valid session.
    """
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AuthorizationError.NOT_AUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def get_permission_context(
    identity: Annotated[Identity | None, Depends(get_current_identity_optional)],
    registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
) -> PermissionContext:
    """Get the caller's PermissionContext (UI gating).

    Unauthenticated callers get a context that answers False everywhere.
    """
    return PermissionContext(registry=registry, identity=identity)
