"""Access policy: the single place that decides who may do what to whom.

Pure functions, no I/O. The gateway calls ``authorize`` exactly once per
request and uses the returned ``Decision.target_id`` to scope what it reads or
writes; stores never check roles themselves.
"""

from typing import Literal

from pydantic import BaseModel

from homeroom.core.exceptions import ForbiddenError, UnauthenticatedError

Operation = Literal[
    "ListUsers",
    "ReadOwnAssignments",
    "ReadAnyUserAssignments",
    "CreateAssignment",
    "UpdateAssignment",
    "DeleteAssignment",
    "ProbeAdmin",
    "RefreshToken",
]

# Allowed for every authenticated caller.
OPEN_OPERATIONS: frozenset[str] = frozenset({"ListUsers", "ReadOwnAssignments", "RefreshToken"})

# Allowed only when the caller is a teacher (admin).
ADMIN_OPERATIONS: frozenset[str] = frozenset(
    {
        "ReadAnyUserAssignments",
        "CreateAssignment",
        "UpdateAssignment",
        "DeleteAssignment",
        "ProbeAdmin",
    }
)


class Principal(BaseModel):
    """Authenticated caller resolved from a verified token."""

    id: int
    username: str
    is_admin: bool


class Decision(BaseModel):
    """
    Outcome of an allowed request.

    target_id: user whose data the operation may touch; None means unrestricted
    (admin listing every user).
    """

    operation: Operation
    target_id: int | None


def resolve_target(caller: Principal, operation: str, requested_target: int | None) -> int | None:
    """
    Pick the user an allowed operation applies to.

    Students always resolve to themselves, whatever they asked for. Admins get
    what they asked for; reading "own" assignments without a target means the
    admin's own record, and listing users without a target is unrestricted.
    """
    if not caller.is_admin:
        return caller.id
    if requested_target is not None:
        return requested_target
    if operation in ("ReadOwnAssignments", "RefreshToken"):
        return caller.id
    return None


def authorize(
    caller: Principal | None,
    operation: Operation,
    requested_target: int | None = None,
) -> Decision:
    """
    Allow or deny ``operation`` for ``caller``.

    Raises UnauthenticatedError when there is no caller and ForbiddenError when
    a student attempts an admin operation. Request payloads play no part in
    the role decision.
    """
    if caller is None:
        raise UnauthenticatedError("Not authenticated")
    if operation in ADMIN_OPERATIONS:
        if not caller.is_admin:
            raise ForbiddenError("Admin access required")
    elif operation not in OPEN_OPERATIONS:
        raise ForbiddenError(f"Unknown operation: {operation}")
    return Decision(
        operation=operation,
        target_id=resolve_target(caller, operation, requested_target),
    )


def can_view_assignments_of(decision: Decision, owner_id: int) -> bool:
    """True if the decision's scope covers ``owner_id``'s assignments."""
    return decision.target_id is None or decision.target_id == owner_id
