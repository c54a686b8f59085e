"""Assignment routes: read your own list, and teacher-only edit/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from homeroom.api.auth import PrincipalDep, require
from homeroom.api.deps import AssignmentStoreDep, CredentialStoreDep
from homeroom.schemas.assignments import AssignmentOut, AssignmentsResponse, AssignmentUpdate
from homeroom.schemas.errors import ErrorResponse
from homeroom.services.access_policy import Decision, authorize

router = APIRouter()


def own_assignments_decision(
    principal: PrincipalDep,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
) -> Decision:
    return authorize(principal, "ReadOwnAssignments", user_id)


@router.get(
    "",
    response_model=AssignmentsResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def list_assignments(
    decision: Annotated[Decision, Depends(own_assignments_decision)],
    principal: PrincipalDep,
    users: CredentialStoreDep,
    assignments: AssignmentStoreDep,
) -> AssignmentsResponse:
    """
    The caller's own assignments in creation order.

    Teachers may pass userId to read a student's list; for students userId is
    ignored and the list is always their own.
    """
    if decision.target_id != principal.id:
        users.get_user(decision.target_id)
    items = assignments.list_for_owner(decision.target_id)
    return AssignmentsResponse(
        user_id=decision.target_id,
        assignments=[AssignmentOut.model_validate(a) for a in items],
    )


@router.patch(
    "/{assignment_id}",
    response_model=AssignmentOut,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    dependencies=[Depends(require("UpdateAssignment"))],
)
def update_assignment(
    assignment_id: int,
    body: AssignmentUpdate,
    assignments: AssignmentStoreDep,
) -> AssignmentOut:
    """Rename an item or move its due date (teachers only)."""
    return AssignmentOut.model_validate(assignments.update(assignment_id, body.changes()))


@router.delete(
    "/{assignment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    dependencies=[Depends(require("DeleteAssignment"))],
)
def delete_assignment(assignment_id: int, assignments: AssignmentStoreDep) -> Response:
    """Remove an item (teachers only)."""
    assignments.delete(assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
