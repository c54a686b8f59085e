"""Error kinds surfaced by the API.

Every failure the gateway reports is one of five kinds: validation,
unauthenticated, forbidden, not found, storage unavailable. Each carries the
HTTP status it maps to, a stable ``code`` for clients, a human message, and
optionally the request field it concerns.
"""


class HomeroomError(Exception):
    """Base class for errors rendered to API clients."""

    code = "InternalError"
    status_code = 500

    def __init__(self, message: str, location: str | None = None) -> None:
        self.message = message
        self.location = location
        super().__init__(message)


class ValidationError(HomeroomError):
    """Malformed or conflicting input; the client must correct and resubmit."""

    code = "ValidationError"
    status_code = 400


class DuplicateUsernameError(ValidationError):
    """Raised when signing up with a username that already exists."""

    code = "DuplicateUsername"

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Username already taken", location="username")


class UnauthenticatedError(HomeroomError):
    """Missing, invalid or expired credentials; the client must log in again."""

    code = "Unauthenticated"
    status_code = 401


class InvalidCredentialsError(UnauthenticatedError):
    """Unknown username or wrong password (deliberately not distinguished)."""

    code = "InvalidCredentials"

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class TokenExpiredError(UnauthenticatedError):
    """Token signature is valid but its expiry has passed."""

    code = "TokenExpired"

    def __init__(self) -> None:
        super().__init__("Token has expired")


class TokenInvalidError(UnauthenticatedError):
    """Token is malformed, tampered with, or signed with another key."""

    code = "TokenInvalid"

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class ForbiddenError(HomeroomError):
    """Authenticated caller lacks the role for the operation."""

    code = "Forbidden"
    status_code = 403


class NotFoundError(HomeroomError):
    """Referenced record does not exist."""

    code = "NotFound"
    status_code = 404


class OwnerNotFoundError(NotFoundError):
    """Assignment owner id does not resolve to a student account."""

    code = "OwnerNotFound"

    def __init__(self, owner_id: int) -> None:
        self.owner_id = owner_id
        super().__init__(f"No student with id {owner_id}")


class StorageUnavailableError(HomeroomError):
    """Database unreachable or failing; transient and safe to retry."""

    code = "StorageUnavailable"
    status_code = 503

    def __init__(self, message: str = "Storage is temporarily unavailable") -> None:
        super().__init__(message)
