"""Plain-text views. Each render takes the session and hands it back unchanged."""

from homeroom.client.errors import ApiError
from homeroom.client.session import SessionContext
from homeroom.schemas.assignments import AssignmentOut
from homeroom.schemas.users import UserOut

GENERIC_FAILURE = "Something went wrong. Please try again."


def _assignment_line(a: AssignmentOut) -> str:
    return f"  [{a.id}] {a.name} (due {a.due_date.isoformat()})"


def render_student_dashboard(session: SessionContext) -> tuple[str, SessionContext]:
    lines = [f"Hello {session.username or 'student'}!", "Assignments"]
    if session.cached_assignments:
        lines.extend(_assignment_line(a) for a in session.cached_assignments)
    else:
        lines.append("  (nothing assigned)")
    return "\n".join(lines), session


def render_teacher_dashboard(
    session: SessionContext,
    students: list[UserOut],
) -> tuple[str, SessionContext]:
    lines = [f"Hello {session.username or 'teacher'}!", "Teacher Dashboard"]
    if not students:
        lines.append("  (no students yet)")
    for student in students:
        lines.append(f"{student.username}:")
        if student.assignments:
            lines.extend(_assignment_line(a) for a in student.assignments)
        else:
            lines.append("  (nothing assigned)")
    return "\n".join(lines), session


def render_dashboard(
    session: SessionContext,
    students: list[UserOut] | None = None,
) -> tuple[str, SessionContext]:
    """Pick the view by the server-verified role; logged-out sessions get a prompt."""
    if not session.authenticated:
        return "Not logged in.", session
    if session.is_admin:
        return render_teacher_dashboard(session, students or [])
    return render_student_dashboard(session)


def render_student_assignments(user: UserOut) -> str:
    """The list shown to a teacher right after assigning an item."""
    lines = [user.username]
    lines.extend(
        f"  Assignment: {a.name} Due Date: {a.due_date.isoformat()}" for a in user.assignments
    )
    return "\n".join(lines)


def render_error(error: ApiError) -> str:
    """Validation and login problems are shown next to their field; the rest generically."""
    if error.inline:
        field = error.location or "form"
        return f"{field}: {error.message}"
    return GENERIC_FAILURE
