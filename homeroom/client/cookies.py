"""Persist the login token in a cookie jar file between runs."""

import logging
from http.cookiejar import LoadError, LWPCookieJar
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "APP_TOKEN"
USER_COOKIE = "APP_USER"


class TokenCookieStore:
    """
    Saves the access token (and the username it was issued to) as cookies
    scoped to the API host, in an LWP-format file.
    """

    def __init__(self, path: Path, domain: str) -> None:
        self.path = Path(path)
        self.domain = domain
        self._jar = LWPCookieJar(str(self.path))
        self._cookies = httpx.Cookies(self._jar)
        if self.path.exists():
            try:
                self._jar.load(ignore_discard=True)
            except (LoadError, OSError) as e:
                logger.warning("Ignoring unreadable cookie file %s: %s", self.path, e)
                self._jar.clear()

    def load(self) -> tuple[str | None, str | None]:
        """Return (token, username) saved by the last login, if any."""
        token = self._cookies.get(TOKEN_COOKIE, domain=self.domain)
        username = self._cookies.get(USER_COOKIE, domain=self.domain)
        return token or None, username or None

    def save(self, token: str, username: str) -> None:
        self._cookies.set(TOKEN_COOKIE, token, domain=self.domain)
        self._cookies.set(USER_COOKIE, username, domain=self.domain)
        self._write()

    def clear(self) -> None:
        self._jar.clear()
        self._write()

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._jar.save(ignore_discard=True, ignore_expires=True)
