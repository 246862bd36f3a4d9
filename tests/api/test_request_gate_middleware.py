"""API tests for the request gate middleware.

Tests cover:
- Redirect to login (307) with callbackUrl for anonymous requests
- Redirect to the landing page with the unauthorized marker
- Session token from cookie or bearer header
- Context headers forwarded downstream; client-supplied ones stripped
- Public paths served without a session
- Trace ID header on every response

Architecture:
- create_app() with in-memory collaborators (see conftest.py)
- Echo routes added per test to observe forwarded headers
"""

from urllib.parse import parse_qs, urlsplit

import pytest
from fastapi import Request

from src.domain.enums import UserRole
from src.presentation.api.middleware.trace_middleware import TRACE_HEADER, get_trace_id

SPOOFED = {
    "x-user-id": "00000000-0000-0000-0000-000000000000",
    "x-user-role": "SUPER_ADMIN",
    "x-user-email": "attacker@example.com",
    "x-pathname": "/forged",
}


@pytest.fixture
def echo_app(app):
    """Application with routes echoing the identity headers they receive."""

    async def echo(request: Request) -> dict:
        return {
            name: request.headers.get(name)
            for name in ("x-user-id", "x-user-role", "x-user-email", "x-pathname")
        }

    app.add_api_route("/dashboard/echo", echo)
    app.add_api_route("/login/echo", echo)
    return app


@pytest.fixture
def echo_client(echo_app):
    from fastapi.testclient import TestClient

    with TestClient(echo_app, follow_redirects=False) as test_client:
        yield test_client


@pytest.mark.api
class TestLoginRedirect:
    """Anonymous requests to protected paths."""

    def test_anonymous_clients_redirects_to_login(self, client):
        response = client.get("/clients")

        assert response.status_code == 307
        assert response.headers["location"] == "/login?callbackUrl=%2Fclients"

    def test_callback_keeps_query_string(self, client):
        response = client.get("/invoices?status=open&page=2")

        location = urlsplit(response.headers["location"])
        assert location.path == "/login"
        assert parse_qs(location.query)["callbackUrl"] == [
            "/invoices?status=open&page=2"
        ]

    def test_invalid_token_redirects_to_login(self, client):
        response = client.get(
            "/dashboard", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 307
        assert response.headers["location"].startswith("/login?callbackUrl=")

    def test_api_paths_are_gated_too(self, client):
        response = client.get("/api/me")

        assert response.status_code == 307
        assert response.headers["location"] == "/login?callbackUrl=%2Fapi%2Fme"


@pytest.mark.api
class TestUnauthorizedRedirect:
    """Authenticated requests with an insufficient role."""

    def test_operator_redirected_from_settings_users(self, client, auth_headers):
        response = client.get(
            "/settings/users", headers=auth_headers(UserRole.OPERATOR)
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/dashboard?error=unauthorized"
        assert "settings" not in response.text
        assert "users" not in response.headers["location"]

    def test_accountant_redirected_from_services(self, client, auth_headers):
        response = client.get("/services/7", headers=auth_headers(UserRole.ACCOUNTANT))

        assert response.headers["location"] == "/dashboard?error=unauthorized"

    def test_unmatched_path_denied(self, client, auth_headers):
        response = client.get("/profile", headers=auth_headers(UserRole.ADMIN))

        assert response.status_code == 307
        assert response.headers["location"] == "/dashboard?error=unauthorized"

    def test_landing_page_shows_marker(self, client, auth_headers):
        response = client.get(
            "/dashboard?error=unauthorized", headers=auth_headers(UserRole.OPERATOR)
        )

        assert response.status_code == 200
        assert response.json()["error"] == "unauthorized"


@pytest.mark.api
class TestAllowedRequests:
    """Authenticated requests that pass the gate."""

    def test_accountant_reaches_invoice(self, client, auth_headers):
        response = client.get(
            "/invoices/123", headers=auth_headers(UserRole.ACCOUNTANT)
        )

        assert response.status_code == 200
        assert response.json()["page"] == "invoice_detail"

    def test_session_cookie_is_accepted(self, client, issue_token):
        client.cookies.set("session", issue_token(UserRole.VIEWER))

        response = client.get("/clients")

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "VIEWER"

    def test_super_admin_reaches_everything(self, client, auth_headers):
        headers = auth_headers(UserRole.SUPER_ADMIN)

        for path in ("/settings/users", "/audit-logs", "/invoices", "/services"):
            assert client.get(path, headers=headers).status_code == 200

    def test_manager_reaches_settings_users_via_first_rule(self, client, auth_headers):
        response = client.get("/settings/users", headers=auth_headers(UserRole.MANAGER))

        assert response.status_code == 200


@pytest.mark.api
class TestContextHeaders:
    """Identity headers forwarded to handlers."""

    def test_headers_attached_on_allow(self, echo_client, users, auth_headers):
        response = echo_client.get(
            "/dashboard/echo", headers=auth_headers(UserRole.OPERATOR)
        )

        operator = users[UserRole.OPERATOR]
        assert response.json() == {
            "x-user-id": str(operator.id),
            "x-user-role": "OPERATOR",
            "x-user-email": operator.email,
            "x-pathname": "/dashboard/echo",
        }

    def test_spoofed_headers_replaced(self, echo_client, auth_headers):
        headers = {**SPOOFED, **auth_headers(UserRole.VIEWER)}

        response = echo_client.get("/dashboard/echo", headers=headers)

        body = response.json()
        assert body["x-user-role"] == "VIEWER"
        assert body["x-user-email"] == "viewer@example.com"
        assert body["x-pathname"] == "/dashboard/echo"

    def test_spoofed_headers_stripped_on_public_path(self, echo_client):
        response = echo_client.get("/login/echo", headers=SPOOFED)

        assert response.status_code == 200
        assert all(value is None for value in response.json().values())

    def test_spoofed_role_does_not_authenticate(self, echo_client):
        response = echo_client.get("/dashboard/echo", headers=SPOOFED)

        assert response.status_code == 307


@pytest.mark.api
class TestPublicPaths:
    """Paths served without a session."""

    @pytest.mark.parametrize("path", ["/", "/health", "/login", "/openapi.json"])
    def test_public_paths(self, client, path):
        assert client.get(path).status_code == 200

    def test_login_page_echoes_callback(self, client):
        response = client.get("/login?callbackUrl=%2Fclients")

        assert response.json()["callbackUrl"] == "/clients"
        assert response.json()["permissions"]["is_authenticated"] is False


@pytest.mark.api
class TestTraceHeader:
    """Trace middleware runs outside the gate."""

    def test_trace_id_generated(self, client):
        response = client.get("/health")

        assert response.headers[TRACE_HEADER]

    def test_trace_id_propagated_on_redirect(self, client):
        response = client.get("/clients", headers={TRACE_HEADER: "trace-123"})

        assert response.status_code == 307
        assert response.headers[TRACE_HEADER] == "trace-123"

    def test_trace_id_visible_to_handlers(self, app, client):
        async def current_trace() -> dict:
            return {"trace_id": get_trace_id()}

        app.add_api_route("/health/trace", current_trace)

        response = client.get("/health/trace", headers={TRACE_HEADER: "trace-456"})

        assert response.json() == {"trace_id": "trace-456"}
        assert get_trace_id() is None

    def test_problem_details_carry_trace_id(self, client, auth_headers):
        headers = {TRACE_HEADER: "trace-789", **auth_headers(UserRole.VIEWER)}

        response = client.delete("/clients/1", headers=headers)

        assert response.status_code == 403
        assert response.json()["trace_id"] == "trace-789"
