"""Permission components for RBAC authorization.

This module defines the Resource and Action enums used for permission checks.
Permissions are expressed as resource:action pairs (e.g., "clients:delete").
Not every pair is meaningful; the permission matrix only declares the pairs
that exist, and an undeclared pair is granted to SUPER_ADMIN alone.

Usage:
    from src.domain.enums import Action, Resource

    # Permission check
    allowed = registry.has_permission(role, Resource.CLIENTS, Action.DELETE)

    # FastAPI dependency
    @router.delete("/clients/{client_id}")
    async def delete_client(
        _: None = Depends(require_permission(Resource.CLIENTS, Action.DELETE)),
    ):
        ...
"""

from enum import Enum


class Resource(str, Enum):
    """Resources that can be protected by authorization.

    Each resource names a domain object class of the back office.

    Resource Categories:
        Operations:
            - CLIENTS, SUPPLIERS, SERVICES, LOADING_ORDERS, DOCUMENTS

        Finance:
            - INVOICES, PAYMENTS, REPORTS

        Administration:
            - USERS, COMPANIES, SETTINGS, AUDIT_LOGS

        General:
            - DASHBOARD, NOTIFICATIONS
    """

    DASHBOARD = "dashboard"
    USERS = "users"
    COMPANIES = "companies"
    CLIENTS = "clients"
    SUPPLIERS = "suppliers"
    SERVICES = "services"
    """Transport and logistics services (the core work item)."""

    LOADING_ORDERS = "loading_orders"
    INVOICES = "invoices"
    REPORTS = "reports"
    SETTINGS = "settings"
    AUDIT_LOGS = "audit_logs"
    DOCUMENTS = "documents"
    PAYMENTS = "payments"
    NOTIFICATIONS = "notifications"

    @classmethod
    def values(cls) -> list[str]:
        """Get all resource values as strings.

        Returns:
            list[str]: Resource values in declaration order.
        """
        return [resource.value for resource in cls]


class Action(str, Enum):
    """Actions that can be performed on resources.

    Generic CRUD actions apply to most resources. Workflow actions
    (MARK_COMPLETED, MARK_BILLED, EDIT_COMPLETED, DELETE_COMPLETED) only
    exist for services.
    """

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    CANCEL = "cancel"
    EXPORT = "export"
    IMPORT = "import"
    ARCHIVE = "archive"
    APPROVE = "approve"
    SEND = "send"

    MARK_COMPLETED = "mark_completed"
    MARK_BILLED = "mark_billed"
    EDIT_COMPLETED = "edit_completed"
    """Edit a service that was already marked completed."""

    DELETE_COMPLETED = "delete_completed"
    MANAGE = "manage"

    @classmethod
    def values(cls) -> list[str]:
        """Get all action values as strings.

        Returns:
            list[str]: Action values in declaration order.
        """
        return [action.value for action in cls]
