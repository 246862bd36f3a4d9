"""Permission registry service.

Answers every authorization question of the back office against an injected
AccessPolicy. The same registry instance serves three call paths:

    - RequestGate: route-level access per request
    - FastAPI dependencies (require_permission, ...): handler-level checks
    - PermissionContext: UI gating (hide or disable controls)

Sharing one registry keeps the three paths consistent. PermissionContext is
a convenience layer for the UI and never a security boundary.

Failure semantics (fail-closed):
    Every query is total. Absent, unknown or malformed input (None, a string
    that is not a known role/resource/action, a non-string path) never raises
    and never grants; it degrades to False, an empty result, or a fallback
    label.

SUPER_ADMIN bypass:
    SUPER_ADMIN satisfies every permission and every route check regardless
    of the policy contents. The bypass is hardcoded here, not a table entry.

Usage:
    from src.core.container import get_permission_registry

    registry = get_permission_registry()
    registry.has_permission(UserRole.VIEWER, Resource.CLIENTS, Action.DELETE)  # False
    registry.can_access_route("ACCOUNTANT", "/invoices/123")  # True
"""

from collections.abc import Iterable
from enum import Enum
from typing import TypeVar

from src.domain.enums import Action, Resource, UserRole
from src.domain.value_objects import AccessPolicy, Permission

RoleInput = UserRole | str | None
ResourceInput = Resource | str
ActionInput = Action | str
PermissionCheck = tuple[ResourceInput, ActionInput]

UNKNOWN_ROLE_LABEL = "Unknown"

_EnumT = TypeVar("_EnumT", bound=Enum)


def _coerce(enum_type: type[_EnumT], value: object) -> _EnumT | None:
    """Map a raw value onto enum_type, or None when it is not a member."""
    if isinstance(value, enum_type):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_type(value)
    except ValueError:
        return None


def _label(value: object) -> str:
    """Render a raw resource/action input for "resource:action" keys."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class PermissionRegistry:
    """Pure query surface over an AccessPolicy.

    Holds no mutable state; safe for unbounded concurrent use.

    Attributes:
        policy: The injected access policy.
    """

    def __init__(self, policy: AccessPolicy) -> None:
        """Initialize the registry.

        Args:
            policy: Access policy built once at process start.
        """
        self._policy = policy

    @property
    def policy(self) -> AccessPolicy:
        """The access policy this registry answers from."""
        return self._policy

    # =========================================================================
    # Gating queries
    # =========================================================================

    def has_permission(
        self,
        role: RoleInput,
        resource: ResourceInput,
        action: ActionInput,
    ) -> bool:
        """Check whether role may perform action on resource.

        Args:
            role: Caller's role. None means unauthenticated.
            resource: Resource to check.
            action: Action to check.

        Returns:
            bool: False for an absent or unknown role, True for SUPER_ADMIN,
                otherwise whether the role is listed for the pair. An
                undeclared resource or action yields False.
        """
        resolved_role = _coerce(UserRole, role)
        if resolved_role is None:
            return False
        if resolved_role is UserRole.SUPER_ADMIN:
            return True

        resolved_resource = _coerce(Resource, resource)
        resolved_action = _coerce(Action, action)
        if resolved_resource is None or resolved_action is None:
            return False

        allowed = self._policy.matrix.allowed_roles(resolved_resource, resolved_action)
        return resolved_role in allowed

    def can_access_route(self, role: RoleInput, path: object) -> bool:
        """Check whether role may access path.

        Route rules are scanned in declaration order and the FIRST rule whose
        prefix the path starts with decides. This is not longest-prefix
        matching: with the default rules MANAGER reaches "/settings/users"
        through the earlier "/settings" rule.

        Args:
            role: Caller's role. None means unauthenticated.
            path: Request path.

        Returns:
            bool: False for an absent or unknown role, True for SUPER_ADMIN,
                False when no rule matches, otherwise whether the role is
                listed by the first matching rule.
        """
        resolved_role = _coerce(UserRole, role)
        if resolved_role is None:
            return False
        if resolved_role is UserRole.SUPER_ADMIN:
            return True
        if not isinstance(path, str):
            return False

        rule = self._policy.first_matching_rule(path)
        if rule is None:
            return False
        return resolved_role in rule.roles

    def is_route_covered(self, path: str) -> bool:
        """Check whether any route rule matches path."""
        return self._policy.first_matching_rule(path) is not None

    # =========================================================================
    # Introspection (UI and debugging; never used for gating)
    # =========================================================================

    def get_role_permissions(self, role: RoleInput) -> tuple[Permission, ...]:
        """List every matrix entry whose allowed roles contain role.

        Enumeration follows matrix declaration order. The SUPER_ADMIN bypass
        is not expanded: only entries listing the role are returned.

        Args:
            role: Role to enumerate.

        Returns:
            tuple[Permission, ...]: Matching permissions, empty for an absent
                or unknown role.
        """
        resolved_role = _coerce(UserRole, role)
        if resolved_role is None:
            return ()
        return tuple(
            permission
            for permission, roles in self._policy.matrix.entries()
            if resolved_role in roles
        )

    def get_accessible_resources(self, role: RoleInput) -> tuple[Resource, ...]:
        """List the distinct resources on which role holds any permission."""
        resources: dict[Resource, None] = {}
        for permission in self.get_role_permissions(role):
            resources.setdefault(permission.resource)
        return tuple(resources)

    def check_many(
        self,
        role: RoleInput,
        checks: Iterable[PermissionCheck],
    ) -> dict[str, bool]:
        """Answer several permission checks at once.

        Args:
            role: Caller's role.
            checks: (resource, action) pairs.

        Returns:
            dict[str, bool]: "resource:action" -> has_permission result.
        """
        return {
            f"{_label(resource)}:{_label(action)}": self.has_permission(
                role, resource, action
            )
            for resource, action in checks
        }

    def has_any_permission(
        self,
        role: RoleInput,
        checks: Iterable[PermissionCheck],
    ) -> bool:
        """True when at least one check passes (False for no checks)."""
        return any(
            self.has_permission(role, resource, action) for resource, action in checks
        )

    def has_all_permissions(
        self,
        role: RoleInput,
        checks: Iterable[PermissionCheck],
    ) -> bool:
        """True when every check passes (True for no checks)."""
        return all(
            self.has_permission(role, resource, action) for resource, action in checks
        )

    # =========================================================================
    # Presentational lookups
    # =========================================================================

    def get_role_display_name(self, role: RoleInput) -> str:
        """Human-readable label for role ("Unknown" when not recognized)."""
        resolved_role = _coerce(UserRole, role)
        if resolved_role is None:
            return UNKNOWN_ROLE_LABEL
        return self._policy.role_labels.get(resolved_role, UNKNOWN_ROLE_LABEL)

    def get_role_badge_style(self, role: RoleInput) -> str:
        """Badge style key for role (neutral gray when not recognized)."""
        resolved_role = _coerce(UserRole, role)
        if resolved_role is None:
            return self._policy.fallback_role_style
        return self._policy.role_styles.get(
            resolved_role, self._policy.fallback_role_style
        )

    def get_permission_description(self, resource: ResourceInput) -> str:
        """One-line description of resource (empty string when unknown)."""
        resolved_resource = _coerce(Resource, resource)
        if resolved_resource is None:
            return ""
        return self._policy.resource_descriptions.get(resolved_resource, "")
