"""Error body shared by every failing response."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Stable error code, human message, and the request field at fault (if any)."""

    code: str
    message: str
    location: str | None = None
