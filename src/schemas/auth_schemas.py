"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints:
    POST /api/auth/login   - Create session (sets the session cookie)
    POST /api/auth/logout  - End session (clears the session cookie)
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Request schema for credentials login.

    POST /api/auth/login
    Returns: 200 OK with the session cookie set
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["ops@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=72,
        description="User's password",
        examples=["SecurePass123!"],
    )
    remember_me: bool = Field(
        default=False,
        description="Persist the session cookie across browser restarts",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ops@example.com",
                "password": "SecurePass123!",
                "remember_me": True,
            }
        }
    )


class SessionUser(BaseModel):
    """Identity carried by the new session."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    name: str | None = Field(None, description="Display name")
    role: str = Field(..., description="User role", examples=["OPERATOR"])
    role_label: str = Field(..., description="Human-readable role", examples=["Operator"])


class LoginResponse(BaseModel):
    """Response schema for successful login.

    The session token itself travels in the HttpOnly cookie, never in the body.
    """

    user: SessionUser = Field(..., description="Authenticated user")
    redirect_to: str = Field(
        ...,
        description="Where the client should navigate next",
        examples=["/dashboard"],
    )


class LogoutResponse(BaseModel):
    """Response schema for logout."""

    message: str = Field(
        default="Successfully logged out.",
        description="Confirmation message",
    )
