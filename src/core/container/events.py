# mypy: disable-error-code="arg-type"
"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. Subscriptions are
wired once, at first use, from LOGGED_EVENTS: each event class maps to the
LoggingEventHandler method ``handle_<event_name_in_snake_case>``.

Usage:
    event_bus = get_event_bus()
    await event_bus.publish(RouteAccessDenied(...))
"""

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from src.domain.events import (
    DomainEvent,
    PermissionDenied,
    RouteAccessDenied,
    UserLoggedOut,
    UserLoginAttempted,
    UserLoginFailed,
    UserLoginSucceeded,
)

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol

LOGGED_EVENTS: tuple[type[DomainEvent], ...] = (
    UserLoginAttempted,
    UserLoginSucceeded,
    UserLoginFailed,
    UserLoggedOut,
    RouteAccessDenied,
    PermissionDenied,
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def handler_method_name(event_class: type[DomainEvent]) -> str:
    """Compute the handler method name for an event class.

    Example:
        >>> handler_method_name(RouteAccessDenied)
        'handle_route_access_denied'
    """
    return f"handle_{_CAMEL_BOUNDARY.sub('_', event_class.__name__).lower()}"


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Returns:
        InMemoryEventBus with every LOGGED_EVENTS entry subscribed.

    Raises:
        RuntimeError: If LoggingEventHandler lacks a handler method for a
            logged event (wiring error, caught at startup).
    """
    from src.core.container.infrastructure import get_logger
    from src.infrastructure.events import InMemoryEventBus
    from src.infrastructure.events.handlers import LoggingEventHandler

    event_bus = InMemoryEventBus(logger=get_logger())
    logging_handler = LoggingEventHandler(logger=get_logger())

    for event_class in LOGGED_EVENTS:
        method_name = handler_method_name(event_class)
        handler_method = getattr(logging_handler, method_name, None)
        if handler_method is None:
            raise RuntimeError(
                f"Missing logging handler for {event_class.__name__}: "
                f"expected LoggingEventHandler.{method_name}"
            )
        event_bus.subscribe(event_class, handler_method)

    return event_bus
