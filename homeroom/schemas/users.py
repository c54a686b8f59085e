"""Request/response schemas for accounts."""

from pydantic import Field, field_validator

from homeroom.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from homeroom.schemas.assignments import AssignmentOut
from homeroom.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Signup body. The password is hashed before storage and never echoed."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    is_admin: bool = False

    @field_validator("username", "password")
    @classmethod
    def reject_surrounding_whitespace(cls, v: str) -> str:
        if v != v.strip():
            raise ValueError("Cannot start or end with whitespace")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return v.strip()


class UserOut(CamelModel):
    """Account as returned to clients (no password hash)."""

    id: int
    username: str
    first_name: str
    last_name: str
    is_admin: bool
    assignments: list[AssignmentOut] = Field(default_factory=list)
