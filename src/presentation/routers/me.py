"""Current-user router.

Endpoints:
    GET /api/me              - Caller identity and role presentation
    GET /api/me/permissions  - Serialized PermissionContext (UI gating)
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from src.application.services import PermissionContext, PermissionRegistry
from src.core.container import get_permission_registry
from src.domain.value_objects import Identity
from src.presentation.routers.api.middleware.auth_dependencies import (
    get_current_identity,
    get_permission_context,
)

me_router = APIRouter(prefix="/api/me", tags=["Current User"])


@me_router.get("", summary="Current user")
async def get_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
    registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
) -> dict[str, str]:
    """Return the caller's identity with role label and badge style."""
    return {
        "id": str(identity.user_id),
        "email": identity.email,
        "role": identity.role.value,
        "role_label": registry.get_role_display_name(identity.role),
        "role_badge_style": registry.get_role_badge_style(identity.role),
    }


@me_router.get("/permissions", summary="Current user permissions")
async def get_my_permissions(
    _: Annotated[Identity, Depends(get_current_identity)],
    context: Annotated[PermissionContext, Depends(get_permission_context)],
) -> dict[str, Any]:
    """Return the caller's permission context.

    UI gating only: hiding a control is not an authorization decision.
    """
    return context.to_dict()
