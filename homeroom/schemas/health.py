"""Service status payload."""

from typing import Literal

from pydantic import Field

from homeroom.schemas.base import CamelModel


class StoreCounts(CamelModel):
    teachers: int
    students: int
    assignments: int


class HealthResponse(CamelModel):
    """
    ``status`` is "degraded" when the stores cannot be reached; ``counts`` is
    then omitted.
    """

    status: Literal["ok", "degraded"]
    environment: str
    storage: Literal["available", "unavailable"]
    counts: StoreCounts | None = None
    token_lifetime_minutes: int = Field(description="Lifetime of newly issued access tokens")
