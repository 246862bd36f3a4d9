"""Authorization domain errors.

Only generic markers exist on purpose: a refused caller learns that access
was refused, never which permission or route rule refused it.
"""


class AuthorizationError:
    """Authorization error constants."""

    UNAUTHORIZED_MARKER = "unauthorized"
    """Query marker appended to the landing page redirect."""

    INSUFFICIENT_PERMISSIONS = "Insufficient permissions"
    NOT_AUTHENTICATED = "Not authenticated"
