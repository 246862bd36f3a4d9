"""Page payload schemas.

Server-rendered page stand-ins: every page endpoint returns the page name,
the requested path, the caller and the caller's permission context, which
is all a template layer needs to gate its controls.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PageUser(BaseModel):
    """Caller shown in the page chrome."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    role: str = Field(..., description="User role")


class PageResponse(BaseModel):
    """Page payload."""

    page: str = Field(..., description="Page identifier", examples=["clients"])
    path: str = Field(..., description="Requested path", examples=["/clients"])
    user: PageUser | None = Field(None, description="Caller, None when anonymous")
    permissions: dict[str, Any] = Field(
        ..., description="Serialized permission context"
    )
    error: str | None = Field(None, description="Error marker from a redirect")
    callback_url: str | None = Field(
        None, alias="callbackUrl", description="Post-login destination (login page)"
    )

    model_config = ConfigDict(populate_by_name=True)


class ActionResponse(BaseModel):
    """Result of a guarded mutating operation."""

    resource: str = Field(..., description="Resource acted upon")
    resource_id: str = Field(..., description="Resource identifier")
    action: str = Field(..., description="Action performed")
    performed_by: str = Field(..., description="User ID of the caller")
