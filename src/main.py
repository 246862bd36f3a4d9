"""
Main FastAPI application entry point.

create_app() assembles the back office: trace middleware, request gate,
RFC 9457 exception handlers and routers. The module-level ``app`` is what
the ASGI server runs:

    uvicorn src.main:app

Tests build their own application with create_app(...) overrides.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.application.services import PermissionRegistry, RequestGate
from src.core.config import settings
from src.core.container import (
    get_event_bus,
    get_gate_config,
    get_logger,
    get_login_rate_limiter,
    get_permission_registry,
    get_session_resolver,
    get_user_repository,
)
from src.domain.protocols import SessionResolverProtocol, UserRepository
from src.domain.value_objects import AccessPolicy
from src.infrastructure.rate_limit import LoginRateLimiter
from src.presentation.api.middleware import RequestGateMiddleware, TraceMiddleware
from src.presentation.routers import auth_router, me_router, pages_router, system_router
from src.presentation.routers.api.errors import register_exception_handlers


def _build_lifespan(rate_limiter: LoginRateLimiter):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan.

        - Startup: start the login rate limiter sweep
        - Shutdown: stop the sweep
        """
        logger = get_logger()
        await rate_limiter.start()
        logger.info(
            "application_started",
            environment=settings.environment.value,
            version=settings.app_version,
        )
        try:
            yield
        finally:
            await rate_limiter.stop()
            logger.info("application_stopped")

    return lifespan


def create_app(
    *,
    policy: AccessPolicy | None = None,
    session_resolver: SessionResolverProtocol | None = None,
    user_repository: UserRepository | None = None,
    rate_limiter: LoginRateLimiter | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Every argument defaults to the container singleton. Overrides are wired
    into both the request gate and the FastAPI dependencies, so the gate and
    the handlers always share one registry and one session resolver.

    Args:
        policy: Access policy (matrix, route rules, labels).
        session_resolver: Session collaborator.
        user_repository: User store for the login flow.
        rate_limiter: Login rate limiter.

    Returns:
        FastAPI: Configured application.
    """
    registry = (
        PermissionRegistry(policy) if policy is not None else get_permission_registry()
    )
    resolver = session_resolver or get_session_resolver()
    limiter = rate_limiter or get_login_rate_limiter()

    gate = RequestGate(
        registry=registry,
        session_resolver=resolver,
        event_bus=get_event_bus(),
        logger=get_logger(),
        config=get_gate_config(),
    )

    app = FastAPI(
        title=settings.app_name,
        description="Transport back office with role-based access control",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=_build_lifespan(limiter),
    )

    app.dependency_overrides[get_permission_registry] = lambda: registry
    app.dependency_overrides[get_session_resolver] = lambda: resolver
    app.dependency_overrides[get_login_rate_limiter] = lambda: limiter
    if user_repository is not None:
        app.dependency_overrides[get_user_repository] = lambda: user_repository

    # Last added runs first: trace -> gate -> routes
    app.add_middleware(RequestGateMiddleware, gate=gate)
    app.add_middleware(TraceMiddleware)

    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(me_router)
    app.include_router(pages_router)

    return app


app = create_app()
