"""Presentation layer - HTTP concerns.

This layer contains Starlette middleware, FastAPI routers and dependencies.
It is thin: it dispatches commands to the application layer, consults the
permission registry, and translates results to HTTP responses.

Structure:
- api/middleware/: Trace propagation and the request gate
- routers/: Pages, /api/auth, /api/me, system endpoints
- routers/api/middleware/: Authentication and authorization dependencies
- routers/api/errors/: RFC 9457 Problem Details handlers

The presentation layer depends on the application layer but contains NO
business logic.
"""
