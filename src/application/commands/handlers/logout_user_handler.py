"""Logout User handler.

Flow:
1. Emit UserLoggedOut event
2. Return Success(LogoutResponse)

Note: Session tokens are stateless JWTs and cannot be revoked server-side.
The caller clears the session cookie; the token itself expires naturally.

Architecture:
- Application layer ONLY imports from domain layer (events, protocols)
- NO infrastructure imports (event bus is injected via protocol)
"""

from dataclasses import dataclass

from src.application.commands.auth_commands import LogoutUser
from src.core.result import Result, Success
from src.domain.events import UserLoggedOut
from src.domain.protocols import EventBusProtocol


@dataclass
class LogoutResponse:
    """Response data for successful logout."""

    message: str = "Successfully logged out."


class LogoutUserHandler:
    """Handler for logout user command."""

    def __init__(self, event_bus: EventBusProtocol) -> None:
        """Initialize logout handler.

        Args:
            event_bus: Event bus for publishing domain events.
        """
        self._event_bus = event_bus

    async def handle(self, cmd: LogoutUser) -> Result[LogoutResponse, str]:
        """Handle logout command.

        Logout always succeeds; there is no server-side session to revoke.

        Args:
            cmd: LogoutUser command.

        Returns:
            Success(LogoutResponse).
        """
        await self._event_bus.publish(
            UserLoggedOut(user_id=cmd.user_id, email=cmd.email)
        )
        return Success(value=LogoutResponse())
