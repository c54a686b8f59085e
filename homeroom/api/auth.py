"""Login, token refresh, the admin probe, and the caller-resolution dependencies."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from homeroom.api.deps import CredentialStoreDep
from homeroom.core.exceptions import TokenInvalidError
from homeroom.core.security import IssuedToken, TokenService, get_token_service
from homeroom.schemas.auth import LoginRequest, ProtectedResponse, TokenResponse
from homeroom.schemas.errors import ErrorResponse
from homeroom.services.access_policy import Decision, Operation, Principal, authorize

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)

TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def _token_response(issued: IssuedToken) -> TokenResponse:
    return TokenResponse(
        auth_token=issued.token,
        token_type="bearer",
        expires_at=issued.expires_at,
    )


def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: TokenServiceDep,
    store: CredentialStoreDep,
) -> Principal | None:
    """
    Dependency: resolve the caller from a Bearer token.

    Returns None when no token was presented (the access policy turns that into
    401). A presented token that fails verification raises immediately. The
    caller counts as admin only if both the token and the stored account say so.
    """
    if credentials is None:
        return None
    claims = tokens.verify(credentials.credentials)
    user = store.get_user_by_username(claims.subject_username)
    if user is None:
        raise TokenInvalidError("User not found")
    return Principal(
        id=user.id,
        username=user.username,
        is_admin=claims.subject_is_admin and bool(user.is_admin),
    )


PrincipalDep = Annotated[Principal | None, Depends(get_principal)]


def require(operation: Operation) -> Callable[..., Decision]:
    """
    Dependency factory: consult the access policy for ``operation``.

    FastAPI resolves dependencies before it validates the request body, so a
    denied caller gets 401/403 whatever the payload looks like.
    """

    def check(principal: PrincipalDep) -> Decision:
        return authorize(principal, operation)

    return check


def require_for_user(operation: Operation) -> Callable[..., Decision]:
    """Like ``require``, with the ``user_id`` path parameter as the requested target."""

    def check(user_id: int, principal: PrincipalDep) -> Decision:
        return authorize(principal, operation, user_id)

    return check


@router.post(
    "/auth/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
def login(body: LoginRequest, store: CredentialStoreDep, tokens: TokenServiceDep) -> TokenResponse:
    """
    Authenticate with username and password; returns a signed access token.
    Include the token in the Authorization header as: Bearer <authToken>
    """
    user = store.verify_credentials(body.username, body.password)
    logger.info("Login succeeded for user id=%s", user.id)
    return _token_response(tokens.issue(user))


@router.post(
    "/auth/refresh",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
def refresh(
    decision: Annotated[Decision, Depends(require("RefreshToken"))],
    store: CredentialStoreDep,
    tokens: TokenServiceDep,
) -> TokenResponse:
    """Exchange a still-valid token for a new one with a fresh expiry."""
    user = store.get_user(decision.target_id)
    return _token_response(tokens.issue(user))


@router.get(
    "/protected",
    response_model=ProtectedResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    dependencies=[Depends(require("ProbeAdmin"))],
)
def protected(principal: PrincipalDep) -> ProtectedResponse:
    """Admin-only probe; clients call it after login to learn whether to show the teacher view."""
    return ProtectedResponse(username=principal.username)
