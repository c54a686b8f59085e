"""Unit tests for homeroom.services.access_policy: who may do what, and to whom."""

import unittest

from homeroom.core.exceptions import ForbiddenError, UnauthenticatedError
from homeroom.services.access_policy import (
    ADMIN_OPERATIONS,
    OPEN_OPERATIONS,
    Principal,
    authorize,
    can_view_assignments_of,
)

TEACHER = Principal(id=1, username="teacher", is_admin=True)
ALICE = Principal(id=2, username="alice", is_admin=False)


class TestUnauthenticated(unittest.TestCase):
    """No caller means every operation is denied as unauthenticated."""

    def test_every_operation_requires_a_caller(self) -> None:
        for op in sorted(OPEN_OPERATIONS | ADMIN_OPERATIONS):
            with self.subTest(op=op):
                with self.assertRaises(UnauthenticatedError):
                    authorize(None, op)


class TestRoleGate(unittest.TestCase):
    """Admin operations are teacher-only; open operations are for everyone."""

    def test_student_denied_admin_operations(self) -> None:
        for op in sorted(ADMIN_OPERATIONS):
            with self.subTest(op=op):
                with self.assertRaises(ForbiddenError):
                    authorize(ALICE, op, requested_target=ALICE.id)

    def test_teacher_allowed_admin_operations(self) -> None:
        for op in sorted(ADMIN_OPERATIONS):
            with self.subTest(op=op):
                self.assertEqual(authorize(TEACHER, op).operation, op)

    def test_open_operations_allowed_for_student(self) -> None:
        for op in sorted(OPEN_OPERATIONS):
            with self.subTest(op=op):
                self.assertEqual(authorize(ALICE, op).operation, op)

    def test_unknown_operation_denied(self) -> None:
        with self.assertRaises(ForbiddenError):
            authorize(TEACHER, "DropDatabase")  # type: ignore[arg-type]


class TestTargetResolution(unittest.TestCase):
    """Students always resolve to themselves; teachers may target anyone."""

    def test_student_request_for_other_user_resolves_to_self(self) -> None:
        decision = authorize(ALICE, "ReadOwnAssignments", requested_target=99)
        self.assertEqual(decision.target_id, ALICE.id)

    def test_teacher_target_is_honored(self) -> None:
        decision = authorize(TEACHER, "CreateAssignment", requested_target=ALICE.id)
        self.assertEqual(decision.target_id, ALICE.id)

    def test_teacher_own_read_defaults_to_self(self) -> None:
        self.assertEqual(authorize(TEACHER, "ReadOwnAssignments").target_id, TEACHER.id)

    def test_teacher_listing_is_unrestricted(self) -> None:
        decision = authorize(TEACHER, "ListUsers")
        self.assertIsNone(decision.target_id)
        self.assertTrue(can_view_assignments_of(decision, 42))

    def test_student_listing_sees_only_own_assignments(self) -> None:
        decision = authorize(ALICE, "ListUsers")
        self.assertTrue(can_view_assignments_of(decision, ALICE.id))
        self.assertFalse(can_view_assignments_of(decision, 3))


if __name__ == "__main__":
    unittest.main()
