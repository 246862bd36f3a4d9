"""Per-user permission context for UI gating.

PermissionContext binds the caller's identity to the shared
PermissionRegistry and exposes the questions page code asks when deciding
which controls to render (can the user delete this client? should the
settings link show?). Every answer delegates to the registry, so the UI can
never drift from what the request gate and the handler guards enforce.

This is a UX layer only. Hiding a button is not a security boundary; the
request gate and the require_* dependencies are.

Usage:
    context = PermissionContext(registry=registry, identity=identity)
    if context.can(Resource.CLIENTS, Action.DELETE):
        ...
    payload = context.to_dict()  # serialized into page responses
"""

from collections.abc import Iterable
from typing import Any

from src.application.services.permission_registry import (
    ActionInput,
    PermissionCheck,
    PermissionRegistry,
    ResourceInput,
    RoleInput,
)
from src.domain.enums import Action, Resource, UserRole
from src.domain.value_objects import Identity

_ADMIN_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN})
_MANAGER_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.MANAGER})

# Flag name -> (resource, action), serialized by to_dict()
CONVENIENCE_FLAGS: dict[str, tuple[Resource, Action]] = {
    "can_view_users": (Resource.USERS, Action.VIEW),
    "can_edit_users": (Resource.USERS, Action.EDIT),
    "can_delete_users": (Resource.USERS, Action.DELETE),
    "can_view_clients": (Resource.CLIENTS, Action.VIEW),
    "can_edit_clients": (Resource.CLIENTS, Action.EDIT),
    "can_delete_clients": (Resource.CLIENTS, Action.DELETE),
    "can_view_services": (Resource.SERVICES, Action.VIEW),
    "can_edit_services": (Resource.SERVICES, Action.EDIT),
    "can_delete_services": (Resource.SERVICES, Action.DELETE),
    "can_edit_completed_services": (Resource.SERVICES, Action.EDIT_COMPLETED),
    "can_mark_services_completed": (Resource.SERVICES, Action.MARK_COMPLETED),
    "can_view_invoices": (Resource.INVOICES, Action.VIEW),
    "can_create_invoices": (Resource.INVOICES, Action.CREATE),
    "can_view_reports": (Resource.REPORTS, Action.VIEW),
    "can_view_settings": (Resource.SETTINGS, Action.VIEW),
    "can_view_audit_logs": (Resource.AUDIT_LOGS, Action.VIEW),
}


class PermissionContext:
    """Permission queries bound to one (possibly absent) identity.

    An absent identity answers False to every question except cannot().
    """

    def __init__(
        self,
        *,
        registry: PermissionRegistry,
        identity: Identity | None,
    ) -> None:
        """Bind an identity to the registry.

        Args:
            registry: Shared permission registry.
            identity: Caller identity, None when unauthenticated.
        """
        self._registry = registry
        self._identity = identity

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def role(self) -> UserRole | None:
        return self._identity.role if self._identity else None

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def can(self, resource: ResourceInput, action: ActionInput) -> bool:
        """Check a single permission."""
        return self._registry.has_permission(self.role, resource, action)

    def cannot(self, resource: ResourceInput, action: ActionInput) -> bool:
        """Negation of can()."""
        return not self.can(resource, action)

    def can_access(self, path: str) -> bool:
        """Check route access for path."""
        return self._registry.can_access_route(self.role, path)

    def can_any(self, checks: Iterable[PermissionCheck]) -> bool:
        """True when any (resource, action) pair is granted."""
        return self._registry.has_any_permission(self.role, checks)

    def can_all(self, checks: Iterable[PermissionCheck]) -> bool:
        """True when every (resource, action) pair is granted."""
        return self._registry.has_all_permissions(self.role, checks)

    def has_role(self, role: RoleInput) -> bool:
        """Exact role comparison (no bypass, no hierarchy)."""
        return self.role is not None and self.role == role

    def has_any_role(self, roles: Iterable[RoleInput]) -> bool:
        """True when the caller holds one of roles."""
        return any(self.has_role(role) for role in roles)

    @property
    def is_admin(self) -> bool:
        """SUPER_ADMIN or ADMIN."""
        return self.role in _ADMIN_ROLES

    @property
    def is_manager(self) -> bool:
        """SUPER_ADMIN, ADMIN or MANAGER."""
        return self.role in _MANAGER_ROLES

    @property
    def permissions(self) -> list[str]:
        """Granted permissions as "resource:action" strings."""
        return [str(p) for p in self._registry.get_role_permissions(self.role)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the context for page payloads and /api/me/permissions."""
        role = self.role
        payload: dict[str, Any] = {
            "is_authenticated": self.is_authenticated,
            "role": role.value if role else None,
            "role_label": self._registry.get_role_display_name(role) if role else None,
            "role_badge_style": self._registry.get_role_badge_style(role),
            "is_admin": self.is_admin,
            "is_manager": self.is_manager,
            "permissions": self.permissions,
            "accessible_resources": [
                resource.value
                for resource in self._registry.get_accessible_resources(role)
            ],
        }
        for flag, (resource, action) in CONVENIENCE_FLAGS.items():
            payload[flag] = self.can(resource, action)
        return payload
