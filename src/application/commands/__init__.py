"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (AuthenticateUser, LogoutUser).
"""

from src.application.commands.auth_commands import (
    AuthenticatedUser,
    AuthenticateUser,
    LoginRejection,
    LogoutUser,
)

__all__ = [
    "AuthenticateUser",
    "AuthenticatedUser",
    "LoginRejection",
    "LogoutUser",
]
