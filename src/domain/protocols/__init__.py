"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import PasswordHashingProtocol, UserRepository
"""

from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.login_rate_limiter_protocol import LoginRateLimiterProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.session_resolver_protocol import SessionResolverProtocol
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "LoginRateLimiterProtocol",
    "PasswordHashingProtocol",
    "SessionResolverProtocol",
    "TokenGenerationProtocol",
    "UserRepository",
]
