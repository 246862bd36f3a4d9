"""Logging event handler for domain events.

Structured logging for authentication and authorization events.

Log Levels:
    - INFO: ATTEMPTED and SUCCEEDED events, logouts
    - WARNING: FAILED events and access denials

Structured Fields:
    - event_id: UUID for event correlation
    - occurred_at: ISO 8601 timestamp (UTC)
    - user_id / email / role: when available
    - reason: machine-readable failure reason (FAILED events)

Usage:
    >>> event_bus = get_event_bus()  # container wires the subscriptions
    >>> await event_bus.publish(UserLoginSucceeded(...))
    >>> # Log output: {"event": "user_login_succeeded", "user_id": "...", ...}
"""

from src.domain.events import (
    PermissionDenied,
    RouteAccessDenied,
    UserLoggedOut,
    UserLoginAttempted,
    UserLoginFailed,
    UserLoginSucceeded,
)
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Attributes:
        _logger: Logger protocol implementation (from container).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize logging handler with logger.

        Args:
            logger: Logger protocol implementation from container.
        """
        self._logger = logger

    # =========================================================================
    # Login Event Handlers
    # =========================================================================

    async def handle_user_login_attempted(self, event: UserLoginAttempted) -> None:
        """Log login attempt (INFO level)."""
        self._logger.info(
            "user_login_attempted",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            email=event.email,
        )

    async def handle_user_login_succeeded(self, event: UserLoginSucceeded) -> None:
        """Log successful login (INFO level)."""
        self._logger.info(
            "user_login_succeeded",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            email=event.email,
            role=event.role,
        )

    async def handle_user_login_failed(self, event: UserLoginFailed) -> None:
        """Log failed login (WARNING level).

        Args:
            event: UserLoginFailed event with email, reason and the user_id
                when the account exists.
        """
        self._logger.warning(
            "user_login_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            email=event.email,
            reason=event.reason,
            user_id=str(event.user_id) if event.user_id else None,
        )

    async def handle_user_logged_out(self, event: UserLoggedOut) -> None:
        """Log logout (INFO level)."""
        self._logger.info(
            "user_logged_out",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            email=event.email,
        )

    # =========================================================================
    # Authorization Event Handlers
    # =========================================================================

    async def handle_route_access_denied(self, event: RouteAccessDenied) -> None:
        """Log request gate denial (WARNING level).

        Args:
            event: RouteAccessDenied event with user, role, path and the
                rule prefix that refused it.
        """
        self._logger.warning(
            "route_access_denied",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            email=event.email,
            role=event.role,
            path=event.path,
            matched_prefix=event.matched_prefix,
        )

    async def handle_permission_denied(self, event: PermissionDenied) -> None:
        """Log handler guard denial (WARNING level)."""
        self._logger.warning(
            "permission_denied",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            user_id=str(event.user_id),
            email=event.email,
            role=event.role,
            permissions=list(event.permissions),
            path=event.path,
        )
