"""Application services (authorization layer).

- PermissionRegistry: pure queries over the injected access policy
- PermissionContext: identity-bound queries for UI gating
- RequestGate: per-request authentication and route authorization
"""

from src.application.services.permission_context import PermissionContext
from src.application.services.permission_registry import PermissionRegistry
from src.application.services.request_gate import (
    GateConfig,
    GateDecision,
    GateOutcome,
    RequestGate,
)

__all__ = [
    "GateConfig",
    "GateDecision",
    "GateOutcome",
    "PermissionContext",
    "PermissionRegistry",
    "RequestGate",
]
