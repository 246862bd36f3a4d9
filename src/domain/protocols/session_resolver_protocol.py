"""Session resolver protocol (port).

The session collaborator turns an opaque session credential into an
Identity. The request gate only cares about two outcomes: an Identity
(authenticated) or None (absent).

Implementations:
    - TokenSessionResolver: signed session tokens (src/infrastructure/security)
"""

from typing import Protocol

from src.domain.value_objects.identity import Identity


class SessionResolverProtocol(Protocol):
    """Resolve a session credential to an identity."""

    async def resolve(self, session_token: str | None) -> Identity | None:
        """Resolve the caller's identity.

        May suspend on I/O (token introspection, cache lookup). Callers
        bound the call with a timeout and treat timeouts and errors as
        absent.

        Args:
            session_token: Raw credential from the cookie or Authorization
                header, None when the request carried none.

        Returns:
            Identity when the credential is valid, None otherwise.
        """
        ...
