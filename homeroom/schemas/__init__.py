"""Pydantic request/response schemas."""

from homeroom.schemas.assignments import (
    AssignmentCreate,
    AssignmentOut,
    AssignmentsResponse,
    AssignmentUpdate,
)
from homeroom.schemas.auth import LoginRequest, ProtectedResponse, TokenResponse
from homeroom.schemas.errors import ErrorResponse
from homeroom.schemas.health import HealthResponse, StoreCounts
from homeroom.schemas.users import UserCreate, UserOut

__all__ = [
    "AssignmentCreate",
    "AssignmentOut",
    "AssignmentUpdate",
    "AssignmentsResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "ProtectedResponse",
    "StoreCounts",
    "TokenResponse",
    "UserCreate",
    "UserOut",
]
