"""Tests for homeroom.services.assignment_store."""

import unittest
from datetime import date
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from homeroom.core.exceptions import (
    NotFoundError,
    OwnerNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from homeroom.models import Assignment
from homeroom.services.assignment_store import AssignmentStore
from homeroom.services.credential_store import CredentialStore

from support import DatabaseTestCase


class AssignmentStoreTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        users = CredentialStore(self.db)
        self.teacher = users.create_user("teacher", "password123", is_admin=True)
        self.alice = users.create_user("alice", "password123")
        self.bob = users.create_user("bob", "password123")
        self.store = AssignmentStore(self.db)


class TestCreate(AssignmentStoreTestCase):
    """Items can only be created for existing students."""

    def test_create_for_student(self) -> None:
        a = self.store.create(self.alice.id, "Essay 1", date(2024, 10, 1))
        self.assertEqual(a.owner_id, self.alice.id)
        self.assertEqual(a.name, "Essay 1")
        self.assertEqual(a.due_date, date(2024, 10, 1))

    def test_unknown_owner(self) -> None:
        with self.assertRaises(OwnerNotFoundError):
            self.store.create(9999, "Essay 1", date(2024, 10, 1))

    def test_teacher_cannot_own_assignments(self) -> None:
        with self.assertRaises(OwnerNotFoundError):
            self.store.create(self.teacher.id, "Essay 1", date(2024, 10, 1))

    def test_creation_order_is_display_order(self) -> None:
        for name in ("First", "Second", "Third"):
            self.store.create(self.alice.id, name, date(2024, 10, 1))
        self.assertEqual(
            [a.name for a in self.store.list_for_owner(self.alice.id)],
            ["First", "Second", "Third"],
        )

    def test_lists_are_per_owner(self) -> None:
        self.store.create(self.alice.id, "Essay 1", date(2024, 10, 1))
        self.assertEqual(self.store.list_for_owner(self.bob.id), [])


class TestUpdateAndDelete(AssignmentStoreTestCase):
    """update/delete touch one record and fail on unknown ids."""

    def setUp(self) -> None:
        super().setUp()
        self.item = self.store.create(self.alice.id, "Essay 1", date(2024, 10, 1))

    def test_update_name_only(self) -> None:
        updated = self.store.update(self.item.id, {"name": "Essay 1 (revised)"})
        self.assertEqual(updated.name, "Essay 1 (revised)")
        self.assertEqual(updated.due_date, date(2024, 10, 1))

    def test_update_due_date(self) -> None:
        updated = self.store.update(self.item.id, {"due_date": date(2024, 10, 8)})
        self.assertEqual(updated.due_date, date(2024, 10, 8))

    def test_owner_is_immutable(self) -> None:
        with self.assertRaises(ValidationError):
            self.store.update(self.item.id, {"owner_id": self.bob.id})
        self.assertEqual(self.store.get(self.item.id).owner_id, self.alice.id)

    def test_update_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.update(9999, {"name": "x"})

    def test_delete(self) -> None:
        self.store.delete(self.item.id)
        with self.assertRaises(NotFoundError):
            self.store.get(self.item.id)

    def test_delete_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.delete(9999)


class TestUpdateLocksRow(unittest.TestCase):
    """Update reads the row FOR UPDATE and commits once."""

    def test_read_modify_write_is_locked(self) -> None:
        session = MagicMock()
        item = Assignment(id=7, owner_id=2, name="Old", due_date=date(2024, 10, 1))
        locked = session.query.return_value.filter.return_value.with_for_update
        locked.return_value.first.return_value = item

        result = AssignmentStore(session).update(7, {"name": "New"})

        locked.assert_called_once_with()
        session.commit.assert_called_once()
        self.assertIs(result, item)
        self.assertEqual(item.name, "New")

    def test_storage_failure_rolls_back(self) -> None:
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with self.assertRaises(StorageUnavailableError):
            AssignmentStore(session).update(7, {"name": "New"})
        session.rollback.assert_called_once()
        session.commit.assert_not_called()


if __name__ == "__main__":
    unittest.main()
