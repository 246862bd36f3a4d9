"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import LoginRequest, PageResponse
"""

from src.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    SessionUser,
)
from src.schemas.page_schemas import ActionResponse, PageResponse, PageUser

__all__ = [
    "ActionResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "PageResponse",
    "PageUser",
    "SessionUser",
]
