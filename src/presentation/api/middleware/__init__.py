"""Starlette middleware (trace propagation, request gate)."""

from src.presentation.api.middleware.request_gate_middleware import (
    RequestGateMiddleware,
)
from src.presentation.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)

__all__ = ["RequestGateMiddleware", "TraceMiddleware", "get_trace_id"]
