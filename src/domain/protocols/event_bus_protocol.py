"""Event bus protocol (port) for domain events.

Architecture:
    - Protocol (structural typing, NOT ABC inheritance)
    - Domain layer defines the interface (port)
    - InMemoryEventBus (src/infrastructure/events) is the adapter
    - Container (src/core/container/events.py) wires handlers at startup

Usage:
    >>> event_bus = get_event_bus()
    >>> event_bus.subscribe(RouteAccessDenied, handler.handle_route_access_denied)
    >>> await event_bus.publish(RouteAccessDenied(...))
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from src.domain.events.base_event import DomainEvent

# Type alias for event handler functions
EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. **Fail-open**: a failing handler never prevents the other
           handlers from running, and publish() never raises.
        2. **Async handlers**: every handler is a coroutine function.
        3. **Exact type routing**: handlers receive only the event type they
           subscribed to (no inheritance matching).
        4. **No ordering**: handlers run concurrently.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register an async handler for an event type.

        Args:
            event_type: Event class to handle.
            handler: Coroutine function taking the event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to every handler registered for its type.

        Publishing with no subscribers is a no-op. Handler exceptions are
        logged by the implementation, never propagated.

        Args:
            event: Domain event to publish.
        """
        ...
