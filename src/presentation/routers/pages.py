"""Page router.

Stand-ins for the server-rendered back-office pages. Each page returns the
payload a template would render: page name, path, caller and permission
context. Route access is enforced by the request gate before these run;
mutating operations are additionally guarded per permission.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.application.services import PermissionContext
from src.domain.enums import Action, Resource
from src.domain.value_objects import Identity
from src.presentation.routers.api.middleware.auth_dependencies import (
    get_current_identity,
    get_permission_context,
)
from src.presentation.routers.api.middleware.authorization_dependencies import (
    require_permission,
)
from src.schemas import ActionResponse, PageResponse, PageUser

pages_router = APIRouter(tags=["Pages"])

CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
Context = Annotated[PermissionContext, Depends(get_permission_context)]


def _page(
    name: str,
    request: Request,
    context: PermissionContext,
    *,
    error: str | None = None,
) -> PageResponse:
    identity = context.identity
    user = (
        PageUser(
            id=str(identity.user_id), email=identity.email, role=identity.role.value
        )
        if identity
        else None
    )
    return PageResponse(
        page=name,
        path=request.url.path,
        user=user,
        permissions=context.to_dict(),
        error=error,
    )


def _action(
    resource: Resource, resource_id: object, action: Action, identity: Identity
) -> ActionResponse:
    return ActionResponse(
        resource=resource.value,
        resource_id=str(resource_id),
        action=action.value,
        performed_by=str(identity.user_id),
    )


# =============================================================================
# Public pages
# =============================================================================


@pages_router.get("/login", response_model=PageResponse, response_model_exclude_none=True)
async def login_page(
    request: Request,
    context: Context,
    callback_url: Annotated[str | None, Query(alias="callbackUrl")] = None,
    error: str | None = None,
) -> PageResponse:
    """Login page; echoes the post-login destination back."""
    page = _page("login", request, context, error=error)
    page.callback_url = callback_url
    return page


# =============================================================================
# Protected pages
# =============================================================================


@pages_router.get("/dashboard", response_model=PageResponse)
async def dashboard(
    request: Request,
    _: CurrentIdentity,
    context: Context,
    error: str | None = None,
) -> PageResponse:
    """Landing page; surfaces the unauthorized redirect marker."""
    return _page("dashboard", request, context, error=error)


@pages_router.get("/clients", response_model=PageResponse)
async def clients(request: Request, _: CurrentIdentity, context: Context) -> PageResponse:
    return _page("clients", request, context)


@pages_router.get("/clients/{client_id}", response_model=PageResponse)
async def client_detail(
    client_id: int, request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("client_detail", request, context)


@pages_router.delete("/clients/{client_id}", response_model=ActionResponse)
async def delete_client(
    client_id: int,
    identity: CurrentIdentity,
    _: Annotated[None, Depends(require_permission(Resource.CLIENTS, Action.DELETE))],
) -> ActionResponse:
    """Delete a client (clients:delete)."""
    return _action(Resource.CLIENTS, client_id, Action.DELETE, identity)


@pages_router.get("/suppliers", response_model=PageResponse)
async def suppliers(request: Request, _: CurrentIdentity, context: Context) -> PageResponse:
    return _page("suppliers", request, context)


@pages_router.get("/services", response_model=PageResponse)
async def services(request: Request, _: CurrentIdentity, context: Context) -> PageResponse:
    return _page("services", request, context)


@pages_router.get("/services/{service_id}", response_model=PageResponse)
async def service_detail(
    service_id: int, request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("service_detail", request, context)


@pages_router.post("/services/{service_id}/complete", response_model=ActionResponse)
async def complete_service(
    service_id: int,
    identity: CurrentIdentity,
    _: Annotated[
        None, Depends(require_permission(Resource.SERVICES, Action.MARK_COMPLETED))
    ],
) -> ActionResponse:
    """Mark a service completed (services:mark_completed)."""
    return _action(Resource.SERVICES, service_id, Action.MARK_COMPLETED, identity)


@pages_router.get("/invoices", response_model=PageResponse)
async def invoices(request: Request, _: CurrentIdentity, context: Context) -> PageResponse:
    return _page("invoices", request, context)


@pages_router.get("/invoices/{invoice_id}", response_model=PageResponse)
async def invoice_detail(
    invoice_id: int, request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("invoice_detail", request, context)


@pages_router.post("/invoices/{invoice_id}/approve", response_model=ActionResponse)
async def approve_invoice(
    invoice_id: int,
    identity: CurrentIdentity,
    _: Annotated[None, Depends(require_permission(Resource.INVOICES, Action.APPROVE))],
) -> ActionResponse:
    """Approve an invoice (invoices:approve)."""
    return _action(Resource.INVOICES, invoice_id, Action.APPROVE, identity)


@pages_router.get("/reports", response_model=PageResponse)
async def reports(request: Request, _: CurrentIdentity, context: Context) -> PageResponse:
    return _page("reports", request, context)


@pages_router.get("/settings", response_model=PageResponse)
async def settings_page(
    request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("settings", request, context)


@pages_router.get("/settings/users", response_model=PageResponse)
async def settings_users(
    request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("settings_users", request, context)


@pages_router.get("/settings/company", response_model=PageResponse)
async def settings_company(
    request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("settings_company", request, context)


@pages_router.get("/audit-logs", response_model=PageResponse)
async def audit_logs(
    request: Request, _: CurrentIdentity, context: Context
) -> PageResponse:
    return _page("audit_logs", request, context)
