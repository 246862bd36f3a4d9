"""Request gate middleware.

Starlette binding of RequestGate: runs before routing on every request and
turns gate decisions into redirects or forwarded requests.

- Strips client-supplied identity headers (x-user-*, x-pathname)
- Reads the session token from the session cookie, falling back to an
  "Authorization: Bearer" header
- Redirects (307) to the login page or to the landing page when refused
- On allow, sets request.state.identity and attaches the context headers
  for downstream handlers
"""

from __future__ import annotations

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from src.application.services import RequestGate
from src.core.config import settings
from src.core.container import get_request_gate

CONTEXT_HEADERS = frozenset({"x-user-id", "x-user-role", "x-user-email", "x-pathname"})

_REDIRECT_STATUS = 307
_BEARER_PREFIX = "bearer "


def extract_session_token(request: Request) -> str | None:
    """Session credential from the cookie, else from a bearer header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    if authorization.lower().startswith(_BEARER_PREFIX):
        return authorization[len(_BEARER_PREFIX) :].strip() or None
    return None


class RequestGateMiddleware(BaseHTTPMiddleware):
    """Authenticate and route-authorize every request.

    Args:
        app: Wrapped ASGI application.
        gate: Gate to consult. Defaults to the container singleton, looked
            up per request.
    """

    def __init__(self, app: ASGIApp, gate: RequestGate | None = None) -> None:
        super().__init__(app)
        self._gate = gate

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Evaluate the gate and forward or redirect.

        Args:
            request (Request): Incoming request.
            call_next (Callable[[Request], Awaitable[Response]]): Next handler.

        Returns:
            Response: Downstream response, or a 307 redirect.
        """
        session_token = extract_session_token(request)
        headers = [
            (name, value)
            for name, value in request.scope["headers"]
            if name.decode("latin-1").lower() not in CONTEXT_HEADERS
        ]

        gate = self._gate or get_request_gate()
        decision = await gate.evaluate(
            path=request.url.path,
            query=request.url.query,
            session_token=session_token,
        )

        if not decision.allowed:
            return RedirectResponse(
                url=decision.redirect_to or gate.config.login_path,
                status_code=_REDIRECT_STATUS,
            )

        request.state.identity = decision.identity
        headers.extend(
            (name.encode("latin-1"), value.encode("utf-8"))
            for name, value in decision.context_headers.items()
        )
        request.scope["headers"] = headers
        return await call_next(request)
