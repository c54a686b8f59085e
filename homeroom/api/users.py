"""Account routes: signup, listing, and assigning homework to a student."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from homeroom.api.auth import require, require_for_user
from homeroom.api.deps import AssignmentStoreDep, CredentialStoreDep
from homeroom.core.config import get_settings
from homeroom.core.exceptions import ForbiddenError
from homeroom.models import User
from homeroom.schemas.assignments import AssignmentCreate, AssignmentOut
from homeroom.schemas.errors import ErrorResponse
from homeroom.schemas.users import UserCreate, UserOut
from homeroom.services.access_policy import Decision, can_view_assignments_of

router = APIRouter()


def _user_out(user: User, decision: Decision) -> UserOut:
    """Serialize ``user``; assignments outside the decision's scope are left out."""
    visible = can_view_assignments_of(decision, user.id)
    return UserOut(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        is_admin=user.is_admin,
        assignments=[AssignmentOut.model_validate(a) for a in user.assignments] if visible else [],
    )


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
def create_user(body: UserCreate, store: CredentialStoreDep) -> UserOut:
    """Sign up. Returns the new account without any password field."""
    if body.is_admin and not get_settings().ALLOW_ADMIN_SIGNUP:
        raise ForbiddenError("Teacher accounts cannot be created through signup", location="isAdmin")
    user = store.create_user(
        username=body.username,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        is_admin=body.is_admin,
    )
    return UserOut(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        is_admin=user.is_admin,
        assignments=[],
    )


@router.get(
    "",
    response_model=list[UserOut],
    responses={401: {"model": ErrorResponse}},
)
def list_users(
    decision: Annotated[Decision, Depends(require("ListUsers"))],
    store: CredentialStoreDep,
) -> list[UserOut]:
    """
    List every account. Teachers see everyone's assignments; a student sees
    only their own, with other accounts' lists returned empty.
    """
    return [_user_out(u, decision) for u in store.list_users()]


@router.get(
    "/{user_id}",
    response_model=UserOut,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_user(
    decision: Annotated[Decision, Depends(require_for_user("ReadAnyUserAssignments"))],
    store: CredentialStoreDep,
) -> UserOut:
    """One account with its assignments (teachers only)."""
    return _user_out(store.get_user(decision.target_id), decision)


@router.post(
    "/{user_id}",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def add_assignment(
    decision: Annotated[Decision, Depends(require_for_user("CreateAssignment"))],
    body: AssignmentCreate,
    users: CredentialStoreDep,
    assignments: AssignmentStoreDep,
) -> UserOut:
    """Assign a homework item to a student; returns the student with all their items."""
    assignments.create(decision.target_id, body.name, body.due_date)
    return _user_out(users.get_user(decision.target_id), decision)
