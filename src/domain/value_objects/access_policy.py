"""Access policy value objects.

The access policy is the single configuration object the authorization layer
runs on. It bundles:

    - PermissionMatrix: resource -> action -> set of allowed roles
    - RouteRule tuple: URL path prefix -> set of allowed roles, in
      declaration order
    - Presentational lookups: role labels, role badge styles and resource
      descriptions

A policy is built once at process start (see src/config/permissions.py) and
injected into PermissionRegistry and RequestGate. Tests build their own
policies instead of patching module state.

Usage:
    from src.domain.value_objects import AccessPolicy, PermissionMatrix, RouteRule

    policy = AccessPolicy(
        matrix=PermissionMatrix({
            Resource.CLIENTS: {Action.VIEW: {UserRole.ADMIN, UserRole.VIEWER}},
        }),
        route_rules=(RouteRule(prefix="/clients", roles={UserRole.ADMIN}),),
    )
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src.domain.enums import Action, Resource, UserRole

DEFAULT_ROLE_STYLE = "bg-gray-100 text-gray-800"
"""Neutral badge style used for unknown roles."""

_NO_ROLES: frozenset[UserRole] = frozenset()
_NO_ACTIONS: Mapping[Action, frozenset[UserRole]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Permission:
    """A (resource, action) pair.

    Renders as "resource:action", the format used by permission listings.
    """

    resource: Resource
    action: Action

    def __str__(self) -> str:
        return f"{self.resource.value}:{self.action.value}"


class PermissionMatrix:
    """Immutable two-level map of (resource, action) to allowed roles.

    Lookups never raise. A resource or action that is not declared yields an
    empty role set, so a missing entry always reads as "nobody" (apart from
    the SUPER_ADMIN bypass applied by the registry).

    Invariants:
        - No mutation after construction (read-only mapping proxies).
        - Every declared entry has a non-empty role set.
        - Declaration order is kept for enumeration.
    """

    __slots__ = ("_entries",)

    def __init__(
        self,
        entries: Mapping[Resource, Mapping[Action, Iterable[UserRole]]],
    ) -> None:
        """Build the matrix from nested mappings.

        Args:
            entries: resource -> action -> roles. Role collections of any
                iterable type are accepted and frozen.

        Raises:
            ValueError: If an entry declares no roles, or a key is not a
                Resource/Action/UserRole member.
        """
        frozen: dict[Resource, Mapping[Action, frozenset[UserRole]]] = {}
        for resource, actions in entries.items():
            if not isinstance(resource, Resource):
                raise ValueError(f"Unknown resource in permission matrix: {resource!r}")
            frozen_actions: dict[Action, frozenset[UserRole]] = {}
            for action, roles in actions.items():
                if not isinstance(action, Action):
                    raise ValueError(
                        f"Unknown action in permission matrix: {resource.value}.{action!r}"
                    )
                role_set = frozenset(roles)
                if not role_set:
                    raise ValueError(
                        f"Permission {resource.value}:{action.value} declares no roles"
                    )
                if not all(isinstance(role, UserRole) for role in role_set):
                    raise ValueError(
                        f"Permission {resource.value}:{action.value} has an unknown role"
                    )
                frozen_actions[action] = role_set
            frozen[resource] = MappingProxyType(frozen_actions)
        self._entries: Mapping[Resource, Mapping[Action, frozenset[UserRole]]] = (
            MappingProxyType(frozen)
        )

    def allowed_roles(self, resource: Resource, action: Action) -> frozenset[UserRole]:
        """Return the roles allowed to perform action on resource.

        Args:
            resource: Resource to look up.
            action: Action to look up.

        Returns:
            frozenset[UserRole]: Allowed roles, empty when the pair is not
                declared.
        """
        return self._entries.get(resource, _NO_ACTIONS).get(action, _NO_ROLES)

    def actions_for(self, resource: Resource) -> Mapping[Action, frozenset[UserRole]]:
        """Return the declared actions of a resource (empty if undeclared)."""
        return self._entries.get(resource, _NO_ACTIONS)

    def entries(self) -> Iterator[tuple[Permission, frozenset[UserRole]]]:
        """Iterate over every declared permission in declaration order."""
        for resource, actions in self._entries.items():
            for action, roles in actions.items():
                yield Permission(resource=resource, action=action), roles

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, Permission):
            return False
        return item.action in self._entries.get(item.resource, _NO_ACTIONS)

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._entries.values())

    def __repr__(self) -> str:
        return f"PermissionMatrix(resources={len(self._entries)}, permissions={len(self)})"


@dataclass(frozen=True, slots=True)
class RouteRule:
    """URL path prefix and the roles allowed under it.

    A path is covered by a rule when it starts with the prefix (plain string
    prefix match, so "/settings" also covers "/settings/users" and
    "/settingsx").

    Raises:
        ValueError: If the prefix is not absolute or no roles are given.
    """

    prefix: str
    roles: frozenset[UserRole]

    def __post_init__(self) -> None:
        if not self.prefix.startswith("/"):
            raise ValueError(f"Route rule prefix must start with '/', got {self.prefix!r}")
        roles = frozenset(self.roles)
        if not roles:
            raise ValueError(f"Route rule {self.prefix!r} declares no roles")
        object.__setattr__(self, "roles", roles)

    def matches(self, path: str) -> bool:
        """Check whether path falls under this rule."""
        return path.startswith(self.prefix)


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessPolicy:
    """Complete authorization configuration (value object).

    Attributes:
        matrix: Permission matrix.
        route_rules: Route rules, evaluated in order; the first matching
            prefix decides.
        role_labels: Human-readable label per role.
        role_styles: Badge style key per role.
        resource_descriptions: One-line description per resource.
        fallback_role_style: Style returned for unknown roles.
    """

    matrix: PermissionMatrix
    route_rules: tuple[RouteRule, ...] = ()
    role_labels: Mapping[UserRole, str] = field(default_factory=dict)
    role_styles: Mapping[UserRole, str] = field(default_factory=dict)
    resource_descriptions: Mapping[Resource, str] = field(default_factory=dict)
    fallback_role_style: str = DEFAULT_ROLE_STYLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "route_rules", tuple(self.route_rules))
        for name in ("role_labels", "role_styles", "resource_descriptions"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def first_matching_rule(self, path: str) -> RouteRule | None:
        """Return the first declared rule covering path, if any."""
        for rule in self.route_rules:
            if rule.matches(path):
                return rule
        return None
