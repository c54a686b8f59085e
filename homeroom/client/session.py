"""Client session manager: login, token persistence, and authenticated calls.

Every flow awaits its requests in order, so a token always exists before an
authenticated call is attempted. Session state is an explicit, immutable
``SessionContext`` value: created at login, replaced on each refresh, and
cleared at logout or when the server rejects the token.
"""

import asyncio
import logging
from datetime import date
from typing import Any
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ConfigDict, Field

from homeroom.client.config import ClientSettings, get_client_settings
from homeroom.client.cookies import TokenCookieStore
from homeroom.client.errors import KIND_BY_STATUS, ApiError, LoginInProgressError
from homeroom.schemas.assignments import AssignmentOut, AssignmentsResponse
from homeroom.schemas.auth import TokenResponse
from homeroom.schemas.users import UserOut

logger = logging.getLogger(__name__)


class SessionContext(BaseModel):
    """
    What the client knows about the logged-in user.

    is_admin comes from probing the admin-only endpoint, never from the
    token's own claim.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    username: str | None = None
    is_admin: bool = False
    cached_assignments: tuple[AssignmentOut, ...] = Field(default_factory=tuple)

    @property
    def authenticated(self) -> bool:
        return self.token is not None


def _error_from_response(resp: httpx.Response) -> ApiError:
    kind = KIND_BY_STATUS.get(resp.status_code, "Error")
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return ApiError(
        kind=kind,
        message=body.get("message") or resp.reason_phrase or "Request failed",
        code=body.get("code"),
        location=body.get("location"),
        status_code=resp.status_code,
    )


class SessionManager:
    """Talks to the Homeroom API on behalf of one user session."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cookie_store: TokenCookieStore,
        settings: ClientSettings | None = None,
    ) -> None:
        self.client = client
        self.cookie_store = cookie_store
        self.settings = settings or get_client_settings()
        self._login_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None) -> "SessionManager":
        settings = settings or get_client_settings()
        client = httpx.AsyncClient(
            base_url=settings.BASE_URL + settings.API_PREFIX,
            timeout=settings.REQUEST_TIMEOUT_SEC,
        )
        host = urlsplit(settings.BASE_URL).hostname or ""
        return cls(client, TokenCookieStore(settings.COOKIE_FILE, host), settings)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        session: SessionContext | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send one request; return the response or raise ApiError.

        GETs answered with 503 are retried with exponential backoff.
        """
        headers = {}
        if session is not None:
            if not session.authenticated:
                raise ApiError("Unauthenticated", "Log in first", location="username")
            headers["Authorization"] = f"Bearer {session.token}"

        attempts = 1 + (self.settings.MAX_RETRIES if method == "GET" else 0)
        for attempt in range(attempts):
            try:
                resp = await self.client.request(method, path, json=json, params=params, headers=headers)
            except httpx.TransportError as e:
                raise ApiError("NetworkError", f"Could not reach the server: {e}") from e
            if resp.status_code < 400:
                return resp
            error = _error_from_response(resp)
            if not error.retryable or attempt == attempts - 1:
                raise error
            delay = self.settings.RETRY_BACKOFF_SEC * (2 ** attempt)
            logger.info("%s %s unavailable, retrying in %.2fs", method, path, delay)
            await asyncio.sleep(delay)
        raise ApiError("Error", "Request failed")

    async def signup(
        self,
        username: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        is_admin: bool = False,
    ) -> UserOut:
        resp = await self._request(
            "POST",
            "/users",
            json={
                "username": username,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
                "isAdmin": is_admin,
            },
        )
        return UserOut.model_validate(resp.json())

    async def login(self, username: str, password: str) -> SessionContext:
        """
        Exchange credentials for a token, then learn the role by probing.

        A second login while one is pending is rejected immediately rather
        than queued.
        """
        if self._login_lock.locked():
            raise LoginInProgressError()
        async with self._login_lock:
            resp = await self._request(
                "POST",
                "/auth/login",
                json={"username": username, "password": password},
            )
            token = TokenResponse.model_validate(resp.json())
            session = await self._verify_role(
                SessionContext(token=token.auth_token, username=username)
            )
            self.cookie_store.save(token.auth_token, username)
            return await self.refresh_assignments(session)

    async def restore(self) -> SessionContext:
        """
        Rebuild a session from the saved cookie.

        The role is re-checked against the server before any teacher view is
        enabled; a rejected token is discarded and an empty session returned.
        """
        token, username = self.cookie_store.load()
        if token is None:
            return SessionContext()
        session = SessionContext(token=token, username=username)
        try:
            session = await self._verify_role(session)
            return await self.refresh_assignments(session)
        except ApiError as e:
            if e.kind != "Unauthenticated":
                raise
            return self.handle_error(session, e)

    def logout(self, session: SessionContext) -> SessionContext:
        self.cookie_store.clear()
        logger.info("Logged out %s", session.username)
        return SessionContext()

    def handle_error(self, session: SessionContext, error: ApiError) -> SessionContext:
        """Terminal error handler for a flow: a rejected token ends the session."""
        if error.kind == "Unauthenticated" and session.authenticated:
            logger.info("Session for %s rejected by server: %s", session.username, error.code)
            return self.logout(session)
        return session

    async def _verify_role(self, session: SessionContext) -> SessionContext:
        try:
            await self._request("GET", "/protected", session=session)
        except ApiError as e:
            if e.kind == "Forbidden":
                return session.model_copy(update={"is_admin": False})
            raise
        return session.model_copy(update={"is_admin": True})

    async def refresh_assignments(self, session: SessionContext) -> SessionContext:
        """Fetch the caller's own assignments into the session cache."""
        resp = await self._request("GET", "/assignments", session=session)
        data = AssignmentsResponse.model_validate(resp.json())
        return session.model_copy(update={"cached_assignments": tuple(data.assignments)})

    async def list_users(self, session: SessionContext) -> list[UserOut]:
        resp = await self._request("GET", "/users", session=session)
        return [UserOut.model_validate(u) for u in resp.json()]

    async def list_students(self, session: SessionContext) -> list[UserOut]:
        return [u for u in await self.list_users(session) if not u.is_admin]

    async def assign(
        self,
        session: SessionContext,
        student_username: str,
        name: str,
        due_date: date,
    ) -> UserOut:
        """Look the student up by username, then add the item to their list."""
        students = await self.list_students(session)
        student = next((s for s in students if s.username == student_username), None)
        if student is None:
            raise ApiError("NotFound", f"No student named {student_username}", location="username")
        resp = await self._request(
            "POST",
            f"/users/{student.id}",
            session=session,
            json={"assignmentName": name, "assignmentDate": due_date.isoformat()},
        )
        return UserOut.model_validate(resp.json())

    async def update_assignment(
        self,
        session: SessionContext,
        assignment_id: int,
        name: str | None = None,
        due_date: date | None = None,
    ) -> AssignmentOut:
        body: dict[str, Any] = {}
        if name is not None:
            body["name"] = name
        if due_date is not None:
            body["dueDate"] = due_date.isoformat()
        resp = await self._request("PATCH", f"/assignments/{assignment_id}", session=session, json=body)
        return AssignmentOut.model_validate(resp.json())

    async def delete_assignment(self, session: SessionContext, assignment_id: int) -> None:
        await self._request("DELETE", f"/assignments/{assignment_id}", session=session)
