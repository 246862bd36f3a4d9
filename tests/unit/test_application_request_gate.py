"""Unit tests for RequestGate.

Tests cover:
- Public and externally authenticated paths bypass the session
- Login redirect with verbatim callbackUrl (path and query string)
- Unauthorized redirect with only the generic marker
- RouteAccessDenied event on refusal; audit failures never change decisions
- Context headers on allow
- Resolver exceptions and timeouts count as unauthenticated
- Unmatched-route policy (deny vs allow)

Architecture:
- Resolver is a small fake; event bus and logger are mocks
"""

import asyncio
from unittest.mock import AsyncMock, Mock, patch
from urllib.parse import parse_qs, urlsplit

import pytest

from src.application.services import (
    GateConfig,
    GateOutcome,
    PermissionRegistry,
    RequestGate,
)
from src.config.permissions import DEFAULT_ACCESS_POLICY
from src.domain.enums import UnmatchedRoutePolicy, UserRole
from src.domain.events import RouteAccessDenied


class FakeResolver:
    """Resolves one known token to one identity."""

    def __init__(self, identity=None, token="valid-token"):
        self.identity = identity
        self.token = token
        self.calls = 0

    async def resolve(self, session_token):
        self.calls += 1
        if session_token == self.token:
            return self.identity
        return None


class SlowResolver:
    async def resolve(self, session_token):
        await asyncio.sleep(1)


class BrokenResolver:
    async def resolve(self, session_token):
        raise ConnectionError("session store unavailable")


def _config(**overrides) -> GateConfig:
    values = {
        "public_prefixes": ("/login", "/health"),
        "external_auth_prefixes": ("/api/auth",),
        "public_exact_paths": ("/",),
    }
    values.update(overrides)
    return GateConfig(**values)


@pytest.fixture
def event_bus():
    return AsyncMock()


@pytest.fixture
def logger():
    return Mock()


@pytest.fixture
def build_gate(event_bus, logger):
    """Factory for gates over the default policy."""

    def _build(resolver, **config_overrides) -> RequestGate:
        return RequestGate(
            registry=PermissionRegistry(DEFAULT_ACCESS_POLICY),
            session_resolver=resolver,
            event_bus=event_bus,
            logger=logger,
            config=_config(**config_overrides),
        )

    return _build


@pytest.mark.unit
class TestPublicPaths:
    """Steps 1-2: allowlisted paths."""

    @pytest.mark.parametrize(
        "path", ["/login", "/login/reset", "/health", "/api/auth/login", "/"]
    )
    async def test_public_path_allowed_without_session(self, build_gate, path):
        resolver = FakeResolver()
        gate = build_gate(resolver)

        decision = await gate.evaluate(path=path)

        assert decision.outcome is GateOutcome.ALLOW
        assert decision.identity is None
        assert decision.context_headers == {}
        assert resolver.calls == 0

    def test_root_is_exact_match_only(self, build_gate):
        gate = build_gate(FakeResolver())

        assert gate.is_public("/") is True
        assert gate.is_public("/clients") is False


@pytest.mark.unit
class TestLoginRedirect:
    """Step 3: no identity."""

    async def test_no_session_redirects_with_callback(self, build_gate):
        gate = build_gate(FakeResolver())

        decision = await gate.evaluate(path="/clients")

        assert decision.outcome is GateOutcome.REDIRECT_LOGIN
        assert decision.redirect_to == "/login?callbackUrl=%2Fclients"

    async def test_callback_includes_query_string(self, build_gate):
        gate = build_gate(FakeResolver())

        decision = await gate.evaluate(path="/invoices", query="status=open&page=2")

        parts = urlsplit(decision.redirect_to)
        assert parts.path == "/login"
        assert parse_qs(parts.query)["callbackUrl"] == ["/invoices?status=open&page=2"]

    async def test_invalid_token_redirects(self, build_gate, make_identity):
        gate = build_gate(FakeResolver(identity=make_identity(UserRole.ADMIN)))

        decision = await gate.evaluate(path="/dashboard", session_token="forged")

        assert decision.outcome is GateOutcome.REDIRECT_LOGIN

    async def test_resolver_exception_counts_as_absent(self, build_gate, logger):
        gate = build_gate(BrokenResolver())

        decision = await gate.evaluate(path="/dashboard", session_token="token")

        assert decision.outcome is GateOutcome.REDIRECT_LOGIN
        logger.error.assert_called_once()
        assert logger.error.call_args[0][0] == "session_resolution_failed"

    async def test_resolver_timeout_counts_as_absent(self, build_gate, logger):
        gate = build_gate(SlowResolver(), resolve_timeout_seconds=0.01)

        decision = await gate.evaluate(path="/dashboard", session_token="token")

        assert decision.outcome is GateOutcome.REDIRECT_LOGIN
        logger.warning.assert_called_once()
        assert logger.warning.call_args[0][0] == "session_resolution_timed_out"

    async def test_custom_login_path(self, build_gate):
        gate = build_gate(FakeResolver(), login_path="/signin")

        decision = await gate.evaluate(path="/reports")

        assert decision.redirect_to == "/signin?callbackUrl=%2Freports"


@pytest.mark.unit
class TestRouteAuthorization:
    """Step 4: role checks."""

    async def test_operator_refused_settings_users(self, build_gate, make_identity):
        identity = make_identity(UserRole.OPERATOR)
        gate = build_gate(FakeResolver(identity=identity))

        decision = await gate.evaluate(path="/settings/users", session_token="valid-token")

        assert decision.outcome is GateOutcome.REDIRECT_UNAUTHORIZED
        assert decision.redirect_to == "/dashboard?error=unauthorized"
        assert decision.context_headers == {}

    async def test_refusal_publishes_audit_event(
        self, build_gate, make_identity, event_bus
    ):
        identity = make_identity(UserRole.OPERATOR)
        gate = build_gate(FakeResolver(identity=identity))

        await gate.evaluate(path="/settings/users", session_token="valid-token")

        event_bus.publish.assert_awaited_once()
        event = event_bus.publish.call_args[0][0]
        assert isinstance(event, RouteAccessDenied)
        assert event.user_id == identity.user_id
        assert event.role == "OPERATOR"
        assert event.path == "/settings/users"
        assert event.matched_prefix == "/settings"

    async def test_redirect_never_names_the_rule(self, build_gate, make_identity):
        gate = build_gate(FakeResolver(identity=make_identity(UserRole.VIEWER)))

        decision = await gate.evaluate(path="/audit-logs", session_token="valid-token")

        assert "audit" not in decision.redirect_to
        assert "VIEWER" not in decision.redirect_to

    async def test_audit_failure_does_not_change_decision(
        self, build_gate, make_identity, event_bus, logger
    ):
        event_bus.publish.side_effect = RuntimeError("audit sink down")
        gate = build_gate(FakeResolver(identity=make_identity(UserRole.OPERATOR)))

        decision = await gate.evaluate(path="/settings", session_token="valid-token")

        assert decision.outcome is GateOutcome.REDIRECT_UNAUTHORIZED
        logger.error.assert_called_once()
        assert logger.error.call_args[0][0] == "route_access_denied_audit_failed"

    async def test_accountant_allowed_invoice(self, build_gate, make_identity, event_bus):
        identity = make_identity(UserRole.ACCOUNTANT)
        gate = build_gate(FakeResolver(identity=identity))

        decision = await gate.evaluate(path="/invoices/123", session_token="valid-token")

        assert decision.allowed is True
        assert decision.identity == identity
        assert decision.context_headers == {
            "x-user-id": str(identity.user_id),
            "x-user-role": "ACCOUNTANT",
            "x-user-email": identity.email,
            "x-pathname": "/invoices/123",
        }
        event_bus.publish.assert_not_awaited()

    async def test_custom_landing_path(self, build_gate, make_identity):
        gate = build_gate(
            FakeResolver(identity=make_identity(UserRole.VIEWER)),
            landing_path="/home",
        )

        decision = await gate.evaluate(path="/settings", session_token="valid-token")

        assert decision.redirect_to == "/home?error=unauthorized"


@pytest.mark.unit
class TestUnmatchedRoutes:
    """Authenticated paths no route rule covers."""

    async def test_denied_by_default(self, build_gate, make_identity, event_bus):
        gate = build_gate(FakeResolver(identity=make_identity(UserRole.ADMIN)))

        decision = await gate.evaluate(path="/profile", session_token="valid-token")

        assert decision.outcome is GateOutcome.REDIRECT_UNAUTHORIZED
        event = event_bus.publish.call_args[0][0]
        assert event.matched_prefix is None

    async def test_super_admin_passes_unmatched(self, build_gate, make_identity):
        gate = build_gate(FakeResolver(identity=make_identity(UserRole.SUPER_ADMIN)))

        decision = await gate.evaluate(path="/profile", session_token="valid-token")

        assert decision.allowed is True

    async def test_allow_policy_skips_role_check(self, build_gate, make_identity):
        gate = build_gate(
            FakeResolver(identity=make_identity(UserRole.VIEWER)),
            unmatched_policy=UnmatchedRoutePolicy.ALLOW,
        )

        decision = await gate.evaluate(path="/profile", session_token="valid-token")

        assert decision.allowed is True
        assert decision.context_headers["x-pathname"] == "/profile"

    async def test_allow_policy_still_enforces_matched_rules(
        self, build_gate, make_identity
    ):
        gate = build_gate(
            FakeResolver(identity=make_identity(UserRole.VIEWER)),
            unmatched_policy=UnmatchedRoutePolicy.ALLOW,
        )

        decision = await gate.evaluate(path="/settings", session_token="valid-token")

        assert decision.outcome is GateOutcome.REDIRECT_UNAUTHORIZED

    async def test_allow_policy_still_requires_session(self, build_gate):
        gate = build_gate(FakeResolver(), unmatched_policy=UnmatchedRoutePolicy.ALLOW)

        decision = await gate.evaluate(path="/profile")

        assert decision.outcome is GateOutcome.REDIRECT_LOGIN

    async def test_route_coverage_comes_from_registry(
        self, event_bus, logger, make_identity
    ):
        registry = PermissionRegistry(DEFAULT_ACCESS_POLICY)
        gate = RequestGate(
            registry=registry,
            session_resolver=FakeResolver(identity=make_identity(UserRole.VIEWER)),
            event_bus=event_bus,
            logger=logger,
            config=_config(unmatched_policy=UnmatchedRoutePolicy.ALLOW),
        )

        with patch.object(
            registry, "is_route_covered", wraps=registry.is_route_covered
        ) as covered:
            decision = await gate.evaluate(
                path="/audit-logs/9", session_token="valid-token"
            )

        covered.assert_called_once_with("/audit-logs/9")
        assert decision.outcome is GateOutcome.REDIRECT_UNAUTHORIZED


@pytest.mark.unit
class TestGateConfig:
    """Test GateConfig validation."""

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="resolve_timeout_seconds"):
            _config(resolve_timeout_seconds=0)

    async def test_explicit_protected_prefixes(self, build_gate, make_identity):
        gate = build_gate(
            FakeResolver(identity=make_identity(UserRole.VIEWER)),
            protected_prefixes=("/settings",),
            unmatched_policy=UnmatchedRoutePolicy.ALLOW,
        )

        audit = await gate.evaluate(path="/audit-logs", session_token="valid-token")
        settings = await gate.evaluate(path="/settings", session_token="valid-token")

        # Only listed prefixes are role-checked
        assert audit.allowed is True
        assert settings.outcome is GateOutcome.REDIRECT_UNAUTHORIZED
