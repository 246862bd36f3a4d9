"""Base domain event class.

Domain events record "things that happened" and are named in past tense
(UserLoginSucceeded, RouteAccessDenied). They are published on the event
bus, which fans them out to subscribed handlers (structured logging today,
an external audit-log sink later).

Usage:
    >>> @dataclass(frozen=True, kw_only=True)
    >>> class UserLoggedOut(DomainEvent):
    ...     user_id: UUID
    ...     email: str
    >>>
    >>> event = UserLoggedOut(user_id=uuid7(), email="ops@example.com")
    >>> event.event_id  # Auto-generated UUID
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses with kw_only=True

    Attributes:
        event_id: Unique identifier for this event instance (UUID v4 by
            default). Used to correlate handler failures with the event.
        occurred_at: When the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
