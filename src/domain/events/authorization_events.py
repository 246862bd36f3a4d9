"""Authorization domain events.

Emitted when an authenticated caller is refused. Denials are recorded for
audit review; the handlers never influence the decision that was already
made.

Handlers:
- LoggingEventHandler: WARNING log line per denial

The events deliberately carry the path or the checked permission for the
audit trail only. None of this is ever echoed back to the caller.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class RouteAccessDenied(DomainEvent):
    """Request gate refused a path because of the caller's role.

    Attributes:
        user_id: ID of the refused user.
        email: Email of the refused user.
        role: Role value the user held.
        path: Requested path.
        matched_prefix: Route rule prefix that refused the role, or None when
            no rule matched (unmatched route denied by policy).
    """

    user_id: UUID
    email: str
    role: str
    path: str
    matched_prefix: str | None = None


@dataclass(frozen=True, kw_only=True)
class PermissionDenied(DomainEvent):
    """Handler-level permission guard refused an operation.

    Attributes:
        user_id: ID of the refused user.
        email: Email of the refused user.
        role: Role value the user held.
        permissions: "resource:action" strings that were required.
        path: Requested path.
    """

    user_id: UUID
    email: str
    role: str
    permissions: tuple[str, ...]
    path: str
