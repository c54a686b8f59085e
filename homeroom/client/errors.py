"""Errors raised by the client, mirroring the server's error kinds."""

# Status code -> error kind reported by the API.
KIND_BY_STATUS = {
    400: "ValidationError",
    401: "Unauthenticated",
    403: "Forbidden",
    404: "NotFound",
    503: "StorageUnavailable",
}

# Kinds shown next to the offending form field; everything else gets a generic notice.
INLINE_KINDS = frozenset({"ValidationError", "Unauthenticated"})


class ApiError(Exception):
    """A failed request, classified by kind."""

    def __init__(
        self,
        kind: str,
        message: str,
        code: str | None = None,
        location: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.code = code or kind
        self.location = location
        self.status_code = status_code
        super().__init__(message)

    @property
    def inline(self) -> bool:
        return self.kind in INLINE_KINDS

    @property
    def retryable(self) -> bool:
        return self.kind == "StorageUnavailable"


class LoginInProgressError(Exception):
    """A login was submitted while another from the same session is pending."""

    def __init__(self) -> None:
        super().__init__("A login is already in progress")
