"""Authentication router.

Endpoints:
    POST /api/auth/login   - Verify credentials, issue the session cookie
    POST /api/auth/logout  - Clear the session cookie

The request gate lets /api/auth through without a session; these endpoints
authenticate on their own.
"""

from typing import Annotated
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.application.commands import AuthenticateUser, LoginRejection, LogoutUser
from src.application.commands.handlers import AuthenticateUserHandler, LogoutUserHandler
from src.application.services import PermissionRegistry
from src.core.config import settings
from src.core.container import (
    get_authenticate_user_handler,
    get_logout_user_handler,
    get_permission_registry,
    get_token_service,
)
from src.core.result import Failure, Success
from src.domain.errors import AuthenticationError
from src.domain.value_objects import Identity
from src.infrastructure.security import JWTService
from src.presentation.routers.api.middleware.auth_dependencies import (
    get_current_identity_optional,
)
from src.schemas import LoginRequest, LoginResponse, LogoutResponse, SessionUser

auth_router = APIRouter(prefix="/api/auth", tags=["Authentication"])

_REJECTION_STATUS: dict[str, int] = {
    AuthenticationError.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthenticationError.ACCOUNT_DISABLED: status.HTTP_403_FORBIDDEN,
    AuthenticationError.EMAIL_NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    AuthenticationError.TOO_MANY_ATTEMPTS: status.HTTP_429_TOO_MANY_REQUESTS,
}


def safe_redirect_target(callback_url: str | None) -> str:
    """Return callback_url when it is a local path, else the landing page.

    Rejects absolute and protocol-relative URLs to prevent open redirects.
    Control characters are rejected outright: browsers drop tab, CR and LF
    before resolving a URL, which turns "/%09/host" into "//host".
    """
    if (
        not callback_url
        or not callback_url.startswith("/")
        or callback_url.startswith("//")
        or "\\" in callback_url
        or any(ord(char) < 0x20 or ord(char) == 0x7F for char in callback_url)
    ):
        return settings.default_landing_path

    parts = urlsplit(callback_url)
    if parts.scheme or parts.netloc:
        return settings.default_landing_path
    return callback_url


def _rejection_to_http(rejection: LoginRejection) -> HTTPException:
    status_code = _REJECTION_STATUS.get(
        rejection.reason, status.HTTP_401_UNAUTHORIZED
    )
    limit = rejection.rate_limit
    if limit is not None and not limit.allowed:
        return HTTPException(
            status_code=status_code,
            detail=(
                "Too many login attempts. "
                f"Please try again in {limit.retry_after_minutes} minutes."
            ),
            headers={"Retry-After": limit.retry_after_header},
        )
    return HTTPException(
        status_code=status_code,
        detail=AuthenticationError.message_for(rejection.reason),
    )


@auth_router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Verify credentials and set the session cookie.",
)
async def login(
    data: LoginRequest,
    response: Response,
    handler: Annotated[AuthenticateUserHandler, Depends(get_authenticate_user_handler)],
    token_service: Annotated[JWTService, Depends(get_token_service)],
    registry: Annotated[PermissionRegistry, Depends(get_permission_registry)],
    callback_url: Annotated[str | None, Query(alias="callbackUrl")] = None,
) -> LoginResponse:
    """Authenticate and open a session.

    Raises:
        HTTPException 401: Invalid email or password.
        HTTPException 403: Account disabled or email not verified.
        HTTPException 429: Too many attempts (Retry-After header set).
    """
    result = await handler.handle(
        AuthenticateUser(email=data.email, password=data.password)
    )

    match result:
        case Failure(error=rejection):
            raise _rejection_to_http(rejection)
        case Success(value=user):
            token = token_service.generate_session_token(
                user_id=user.user_id, email=user.email, role=user.role
            )
            response.set_cookie(
                key=settings.session_cookie_name,
                value=token,
                max_age=token_service.expiration_seconds if data.remember_me else None,
                path="/",
                httponly=True,
                samesite="lax",
                secure=settings.is_production,
            )
            return LoginResponse(
                user=SessionUser(
                    id=user.user_id,
                    email=user.email,
                    name=user.name,
                    role=user.role.value,
                    role_label=registry.get_role_display_name(user.role),
                ),
                redirect_to=safe_redirect_target(callback_url),
            )


@auth_router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Log out",
    description="Clear the session cookie.",
)
async def logout(
    response: Response,
    identity: Annotated[Identity | None, Depends(get_current_identity_optional)],
    handler: Annotated[LogoutUserHandler, Depends(get_logout_user_handler)],
) -> LogoutResponse:
    """End the session. Succeeds without a session too."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    if identity is None:
        return LogoutResponse()

    match await handler.handle(LogoutUser(user_id=identity.user_id, email=identity.email)):
        case Success(value=outcome):
            return LogoutResponse(message=outcome.message)
        case Failure():
            return LogoutResponse()
