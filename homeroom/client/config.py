"""Client configuration loaded from HOMEROOM_* environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Where the API lives and how the client stores its login."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEROOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    BASE_URL: str = "http://localhost:8000"
    API_PREFIX: str = "/api"
    COOKIE_FILE: Path = Path.home() / ".homeroom" / "cookies.txt"
    REQUEST_TIMEOUT_SEC: float = 30.0
    # Retries apply only to reads answered with 503 (storage unavailable).
    MAX_RETRIES: int = 3
    RETRY_BACKOFF_SEC: float = 0.5

    @field_validator("BASE_URL")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        s = v.strip().rstrip("/")
        if not (s.lower().startswith("http://") or s.lower().startswith("https://")):
            raise ValueError("HOMEROOM_BASE_URL must use http or https (e.g. http://localhost:8000)")
        return s

    @field_validator("REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0 or v > 300:
            raise ValueError("HOMEROOM_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 300")
        return v

    @field_validator("MAX_RETRIES")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        if v < 0 or v > 10:
            raise ValueError("HOMEROOM_MAX_RETRIES must be between 0 and 10")
        return v

    @field_validator("RETRY_BACKOFF_SEC")
    @classmethod
    def validate_backoff(cls, v: float) -> float:
        if v < 0 or v > 30:
            raise ValueError("HOMEROOM_RETRY_BACKOFF_SEC must be between 0 and 30")
        return v


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
