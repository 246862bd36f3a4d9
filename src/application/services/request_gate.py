"""Request gate decision logic.

Runs once per inbound request, before any handler, and decides whether the
request proceeds. The logic here is host-agnostic: it takes a path, a query
string and the raw session credential and returns a GateDecision. The
Starlette binding (RequestGateMiddleware) turns decisions into redirects or
forwarded requests.

Flow (terminal at the first decisive step):
    1. Public path (login, password reset, health, ...)   -> ALLOW
    2. Externally authenticated path (/api/auth/...)      -> ALLOW
    3. Resolve identity (bounded by a timeout)
       - absent, failed or timed out                      -> REDIRECT to login
    4. Route authorization via PermissionRegistry
       - path under a protected prefix, or unmatched path
         under the DENY policy, and role refused          -> REDIRECT to landing
    5. ALLOW with identity and context headers

Unauthorized redirects carry only the generic "error=unauthorized" marker.
The refused path and role go to the audit trail (RouteAccessDenied event),
never to the caller.

Usage:
    gate = RequestGate(registry=registry, session_resolver=resolver,
                       event_bus=event_bus, logger=logger, config=config)
    decision = await gate.evaluate(path="/clients", query="", session_token=token)
    if decision.outcome is GateOutcome.ALLOW:
        ...
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlencode

from src.application.services.permission_registry import PermissionRegistry
from src.domain.enums import UnmatchedRoutePolicy
from src.domain.errors import AuthorizationError
from src.domain.events import RouteAccessDenied
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    SessionResolverProtocol,
)
from src.domain.value_objects import Identity


class GateOutcome(str, Enum):
    """Terminal outcome of a gate evaluation."""

    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_UNAUTHORIZED = "redirect_unauthorized"


@dataclass(frozen=True, slots=True, kw_only=True)
class GateConfig:
    """Static configuration of the request gate.

    Attributes:
        public_prefixes: Paths served without a session (prefix match).
        external_auth_prefixes: Paths that authenticate on their own.
        public_exact_paths: Paths served without a session (exact match).
        protected_prefixes: Prefixes that are role-checked. None means every
            route rule prefix of the registry's policy.
        unmatched_policy: Treatment of authenticated paths no route rule
            covers.
        login_path: Redirect target for unauthenticated requests.
        landing_path: Redirect target for refused requests.
        resolve_timeout_seconds: Bound for session resolution.
    """

    public_prefixes: tuple[str, ...]
    external_auth_prefixes: tuple[str, ...]
    public_exact_paths: tuple[str, ...] = ()
    protected_prefixes: tuple[str, ...] | None = None
    unmatched_policy: UnmatchedRoutePolicy = UnmatchedRoutePolicy.DENY
    login_path: str = "/login"
    landing_path: str = "/dashboard"
    resolve_timeout_seconds: float = 2.0

    def __post_init__(self) -> None:
        if self.resolve_timeout_seconds <= 0:
            raise ValueError(
                f"resolve_timeout_seconds must be positive, got {self.resolve_timeout_seconds}"
            )


@dataclass(frozen=True, slots=True, kw_only=True)
class GateDecision:
    """Result of a gate evaluation.

    Attributes:
        outcome: ALLOW or one of the redirects.
        identity: Resolved identity (ALLOW on authenticated paths only).
        redirect_to: Location for redirects (path plus query string).
        context_headers: Headers to attach to the forwarded request.
    """

    outcome: GateOutcome
    identity: Identity | None = None
    redirect_to: str | None = None
    context_headers: dict[str, str] = field(default_factory=dict)

    @property
    def allowed(self) -> bool:
        return self.outcome is GateOutcome.ALLOW


def _starts_with_any(path: str, prefixes: tuple[str, ...]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


class RequestGate:
    """Per-request authentication and route authorization.

    Stateless across requests apart from its injected collaborators; one
    instance serves the whole application.
    """

    def __init__(
        self,
        *,
        registry: PermissionRegistry,
        session_resolver: SessionResolverProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        config: GateConfig,
    ) -> None:
        """Initialize the gate.

        Args:
            registry: Shared permission registry.
            session_resolver: Session collaborator (credential -> Identity).
            event_bus: Receives RouteAccessDenied events for audit.
            logger: Structured logger.
            config: Gate configuration.
        """
        self._registry = registry
        self._session_resolver = session_resolver
        self._event_bus = event_bus
        self._logger = logger
        self._config = config

    @property
    def config(self) -> GateConfig:
        return self._config

    def is_public(self, path: str) -> bool:
        """Check whether path bypasses the session requirement."""
        return (
            path in self._config.public_exact_paths
            or _starts_with_any(path, self._config.public_prefixes)
            or _starts_with_any(path, self._config.external_auth_prefixes)
        )

    async def evaluate(
        self,
        *,
        path: str,
        query: str = "",
        session_token: str | None = None,
    ) -> GateDecision:
        """Decide whether a request may proceed.

        Args:
            path: Request path.
            query: Raw query string without the leading "?".
            session_token: Session credential from the request, if any.

        Returns:
            GateDecision: ALLOW, REDIRECT_LOGIN or REDIRECT_UNAUTHORIZED.
        """
        # Steps 1-2: public and externally authenticated paths
        if self.is_public(path):
            return GateDecision(outcome=GateOutcome.ALLOW)

        # Step 3: identity
        identity = await self._resolve_identity(session_token, path)
        if identity is None:
            return GateDecision(
                outcome=GateOutcome.REDIRECT_LOGIN,
                redirect_to=self._login_redirect(path, query),
            )

        # Step 4: route authorization
        if self._requires_route_check(path) and not self._registry.can_access_route(
            identity.role, path
        ):
            await self._record_denial(identity, path)
            return GateDecision(
                outcome=GateOutcome.REDIRECT_UNAUTHORIZED,
                identity=identity,
                redirect_to=(
                    f"{self._config.landing_path}"
                    f"?{urlencode({'error': AuthorizationError.UNAUTHORIZED_MARKER})}"
                ),
            )

        # Steps 5-6: annotate and allow
        return GateDecision(
            outcome=GateOutcome.ALLOW,
            identity=identity,
            context_headers=identity.as_context_headers(path),
        )

    def _requires_route_check(self, path: str) -> bool:
        protected = self._config.protected_prefixes
        if protected is None:
            if self._registry.is_route_covered(path):
                return True
        elif _starts_with_any(path, protected):
            return True
        return self._config.unmatched_policy is UnmatchedRoutePolicy.DENY

    def _login_redirect(self, path: str, query: str) -> str:
        original = f"{path}?{query}" if query else path
        return f"{self._config.login_path}?{urlencode({'callbackUrl': original})}"

    async def _resolve_identity(
        self, session_token: str | None, path: str
    ) -> Identity | None:
        """Resolve identity; any failure or timeout counts as absent."""
        try:
            async with asyncio.timeout(self._config.resolve_timeout_seconds):
                return await self._session_resolver.resolve(session_token)
        except TimeoutError:
            self._logger.warning(
                "session_resolution_timed_out",
                path=path,
                timeout_seconds=self._config.resolve_timeout_seconds,
            )
        except Exception as error:
            self._logger.error("session_resolution_failed", error=error, path=path)
        return None

    async def _record_denial(self, identity: Identity, path: str) -> None:
        """Publish the denial for audit; never alters the decision."""
        rule = self._registry.policy.first_matching_rule(path)
        try:
            await self._event_bus.publish(
                RouteAccessDenied(
                    user_id=identity.user_id,
                    email=identity.email,
                    role=identity.role.value,
                    path=path,
                    matched_prefix=rule.prefix if rule else None,
                )
            )
        except Exception as error:
            self._logger.error(
                "route_access_denied_audit_failed",
                error=error,
                user_id=str(identity.user_id),
                path=path,
            )
