"""Command handlers."""

from src.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from src.application.commands.handlers.logout_user_handler import (
    LogoutResponse,
    LogoutUserHandler,
)

__all__ = [
    "AuthenticateUserHandler",
    "LogoutResponse",
    "LogoutUserHandler",
]
