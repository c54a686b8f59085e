"""Password hashing and signed access tokens (issue and verify)."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import BaseModel

from homeroom.core.config import get_settings
from homeroom.core.exceptions import TokenExpiredError, TokenInvalidError

if TYPE_CHECKING:
    from homeroom.core.config import Settings
    from homeroom.models.user import User

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Claims every token must carry; anything missing is rejected as invalid.
REQUIRED_CLAIMS = ["sub", "admin", "iat", "exp"]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """
    Hash checked when a login names an unknown user.

    Uses the configured cost so a miss takes as long as a wrong password.
    """
    return hash_password("not-a-real-password-for-timing-only")


class TokenClaims(BaseModel):
    """Decoded payload of a verified access token."""

    subject_username: str
    subject_is_admin: bool
    issued_at: datetime
    expires_at: datetime


class IssuedToken(TokenClaims):
    """A freshly signed token plus its decoded claims."""

    token: str


class TokenService:
    """
    Issues and verifies HMAC-signed JWTs bound to a username and role flag.

    Holds no per-request state: verification is pure and safe to call
    concurrently.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 10080) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, user: "User", now: datetime | None = None) -> IssuedToken:
        """Sign a token for ``user`` valid for ``expire_minutes`` from ``now``."""
        issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
        expires_at = issued_at + timedelta(minutes=self.expire_minutes)
        payload: dict[str, Any] = {
            "sub": user.username,
            "admin": bool(user.is_admin),
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        return IssuedToken(
            token=token,
            subject_username=user.username,
            subject_is_admin=bool(user.is_admin),
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises TokenExpiredError past ``exp`` and TokenInvalidError for a bad
        signature, wrong key, malformed structure, or missing claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.PyJWTError as e:
            raise TokenInvalidError() from e

        sub = payload.get("sub")
        admin = payload.get("admin")
        if not isinstance(sub, str) or not sub or not isinstance(admin, bool):
            raise TokenInvalidError("Invalid token payload")
        return TokenClaims(
            subject_username=sub,
            subject_is_admin=admin,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    return TokenService.from_settings(get_settings())
