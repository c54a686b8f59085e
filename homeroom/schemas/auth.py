"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import Field

from homeroom.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN
from homeroom.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class TokenResponse(CamelModel):
    """Signed access token returned after login or refresh."""

    auth_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="Expiry timestamp (UTC)")


class ProtectedResponse(CamelModel):
    """Payload of the admin-only probe."""

    message: str = "Admin access granted"
    username: str
