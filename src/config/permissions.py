"""Back-office access policy.

This module defines the build-time authorization tables of the back office:
the permission matrix, the route rules, and the presentational lookups
(role labels, badge styles, resource descriptions). They are assembled into
DEFAULT_ACCESS_POLICY, which the container injects into PermissionRegistry
and RequestGate.

Architecture:
    - src/domain/value_objects/access_policy.py: generic policy value objects
    - src/config/permissions.py: the application's concrete tables (THIS FILE)

Usage:
    ```python
    from src.config.permissions import DEFAULT_ACCESS_POLICY

    registry = PermissionRegistry(DEFAULT_ACCESS_POLICY)
    ```

Editing rules:
    - SUPER_ADMIN is listed explicitly in every entry even though the
      registry bypass already covers it; the listing keeps the table
      readable as documentation.
    - ROUTE_RULES is order-sensitive. The first rule whose prefix matches a
      path decides, so "/settings" (MANAGER allowed) shadows the stricter
      "/settings/users" and "/settings/company" rules for MANAGER.
"""

from src.domain.enums import Action, Resource, UserRole
from src.domain.value_objects import AccessPolicy, PermissionMatrix, RouteRule

SA = UserRole.SUPER_ADMIN
AD = UserRole.ADMIN
MG = UserRole.MANAGER
AC = UserRole.ACCOUNTANT
OP = UserRole.OPERATOR
VW = UserRole.VIEWER

ALL_ROLES = frozenset(UserRole)

# =============================================================================
# Permission Matrix (resource -> action -> allowed roles)
# =============================================================================

PERMISSION_MATRIX = PermissionMatrix(
    {
        Resource.DASHBOARD: {
            Action.VIEW: {SA, AD, MG, OP, VW},
        },
        Resource.USERS: {
            Action.VIEW: {SA, AD},
            Action.CREATE: {SA, AD},
            Action.EDIT: {SA, AD},
            Action.DELETE: {SA},
            Action.MANAGE: {SA, AD},
        },
        Resource.COMPANIES: {
            Action.VIEW: {SA, AD, MG},
            Action.CREATE: {SA, AD},
            Action.EDIT: {SA, AD},
            Action.DELETE: {SA},
            Action.MANAGE: {SA, AD},
        },
        Resource.CLIENTS: {
            Action.VIEW: {SA, AD, MG, OP, VW},
            Action.CREATE: {SA, AD, MG},
            Action.EDIT: {SA, AD, MG},
            Action.DELETE: {SA, AD},
            Action.EXPORT: {SA, AD, MG},
            Action.IMPORT: {SA, AD},
        },
        Resource.SUPPLIERS: {
            Action.VIEW: {SA, AD, MG, OP, VW},
            Action.CREATE: {SA, AD, MG},
            Action.EDIT: {SA, AD, MG},
            Action.DELETE: {SA, AD},
            Action.EXPORT: {SA, AD, MG},
            Action.IMPORT: {SA, AD},
        },
        Resource.SERVICES: {
            Action.VIEW: {SA, AD, MG, OP, VW},
            Action.CREATE: {SA, AD, MG, OP},
            Action.EDIT: {SA, AD, MG, OP},
            Action.DELETE: {SA, AD, MG},
            Action.CANCEL: {SA, AD, MG},
            Action.MARK_COMPLETED: {SA, AD, MG},
            Action.MARK_BILLED: {SA, AD, MG},
            Action.EDIT_COMPLETED: {SA, AD},
            Action.DELETE_COMPLETED: {SA, AD},
            Action.EXPORT: {SA, AD, MG},
            Action.APPROVE: {SA, AD, MG},
            Action.ARCHIVE: {SA, AD, MG},
        },
        Resource.LOADING_ORDERS: {
            Action.VIEW: {SA, AD, MG, OP, VW},
            Action.CREATE: {SA, AD, MG, OP},
            Action.EDIT: {SA, AD, MG},
            Action.DELETE: {SA, AD},
            Action.SEND: {SA, AD, MG},
            Action.EXPORT: {SA, AD, MG},
        },
        Resource.INVOICES: {
            Action.VIEW: {SA, AD, MG, AC, VW},
            Action.CREATE: {SA, AD, MG, AC},
            Action.EDIT: {SA, AD, MG, AC},
            Action.DELETE: {SA, AD},
            Action.APPROVE: {SA, AD, MG},
            Action.SEND: {SA, AD, MG, AC},
            Action.EXPORT: {SA, AD, MG, AC},
        },
        Resource.REPORTS: {
            Action.VIEW: {SA, AD, MG, AC, VW},
            Action.CREATE: {SA, AD, MG},
            Action.EXPORT: {SA, AD, MG, AC},
        },
        Resource.SETTINGS: {
            Action.VIEW: {SA, AD, MG},
            Action.EDIT: {SA, AD},
            Action.MANAGE: {SA, AD},
        },
        Resource.AUDIT_LOGS: {
            Action.VIEW: {SA, AD},
            Action.EXPORT: {SA, AD},
        },
        Resource.DOCUMENTS: {
            Action.VIEW: {SA, AD, MG, OP, VW},
            Action.CREATE: {SA, AD, MG, OP},
            Action.DELETE: {SA, AD, MG},
            Action.SEND: {SA, AD, MG},
        },
        Resource.PAYMENTS: {
            Action.VIEW: {SA, AD, MG, AC},
            Action.CREATE: {SA, AD, AC},
            Action.EDIT: {SA, AD, AC},
            Action.DELETE: {SA, AD},
            Action.APPROVE: {SA, AD, MG},
        },
        Resource.NOTIFICATIONS: {
            Action.VIEW: ALL_ROLES,
            Action.MANAGE: ALL_ROLES,
        },
    }
)

# =============================================================================
# Route Rules (path prefix -> allowed roles), first match wins
# =============================================================================

ROUTE_RULES: tuple[RouteRule, ...] = (
    RouteRule("/dashboard", ALL_ROLES),
    RouteRule("/services", frozenset({SA, AD, MG, OP, VW})),
    RouteRule("/clients", frozenset({SA, AD, MG, OP, VW})),
    RouteRule("/suppliers", frozenset({SA, AD, MG, OP, VW})),
    RouteRule("/invoices", frozenset({SA, AD, MG, AC, VW})),
    RouteRule("/reports", frozenset({SA, AD, MG, AC, VW})),
    RouteRule("/settings", frozenset({SA, AD, MG})),
    RouteRule("/settings/users", frozenset({SA, AD})),
    RouteRule("/settings/company", frozenset({SA, AD})),
    RouteRule("/audit-logs", frozenset({SA, AD})),
    # Per-user API endpoints (permission introspection)
    RouteRule("/api/me", ALL_ROLES),
)

# =============================================================================
# Request gate allowlists
# =============================================================================

PUBLIC_ROUTE_PREFIXES: tuple[str, ...] = (
    "/login",
    "/register",
    "/forgot-password",
    "/reset-password",
    "/verify-email",
    "/auth-error",
    "/health",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
)
"""Paths served without a session (prefix match)."""

PUBLIC_EXACT_PATHS: tuple[str, ...] = ("/",)
"""Paths served without a session (exact match)."""

EXTERNAL_AUTH_PREFIXES: tuple[str, ...] = ("/api/auth",)
"""Paths that run their own authentication (login/logout endpoints)."""

# =============================================================================
# Presentational lookups
# =============================================================================

ROLE_DISPLAY_NAMES: dict[UserRole, str] = {
    SA: "Super Admin",
    AD: "Administrator",
    MG: "Manager",
    AC: "Accountant",
    OP: "Operator",
    VW: "Viewer",
}

ROLE_BADGE_STYLES: dict[UserRole, str] = {
    SA: "bg-purple-100 text-purple-800 dark:bg-purple-900 dark:text-purple-200",
    AD: "bg-red-100 text-red-800 dark:bg-red-900 dark:text-red-200",
    MG: "bg-blue-100 text-blue-800 dark:bg-blue-900 dark:text-blue-200",
    AC: "bg-green-100 text-green-800 dark:bg-green-900 dark:text-green-200",
    OP: "bg-yellow-100 text-yellow-800 dark:bg-yellow-900 dark:text-yellow-200",
    VW: "bg-gray-100 text-gray-800 dark:bg-gray-900 dark:text-gray-200",
}

PERMISSION_DESCRIPTIONS: dict[Resource, str] = {
    Resource.DASHBOARD: "Access to main dashboard and analytics",
    Resource.USERS: "Manage system users and their permissions",
    Resource.COMPANIES: "Manage company settings and information",
    Resource.CLIENTS: "Manage client accounts and information",
    Resource.SUPPLIERS: "Manage supplier accounts and information",
    Resource.SERVICES: "Manage transport and logistics services",
    Resource.LOADING_ORDERS: "Create and manage loading orders",
    Resource.INVOICES: "Manage invoices and billing",
    Resource.REPORTS: "View and generate reports",
    Resource.SETTINGS: "Access system settings",
    Resource.AUDIT_LOGS: "View system audit logs",
    Resource.DOCUMENTS: "Manage documents and files",
    Resource.PAYMENTS: "Process and manage payments",
    Resource.NOTIFICATIONS: "View and manage notifications",
}

DEFAULT_ACCESS_POLICY = AccessPolicy(
    matrix=PERMISSION_MATRIX,
    route_rules=ROUTE_RULES,
    role_labels=ROLE_DISPLAY_NAMES,
    role_styles=ROLE_BADGE_STYLES,
    resource_descriptions=PERMISSION_DESCRIPTIONS,
)
