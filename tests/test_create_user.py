"""Tests for the create_user command-line script."""

import unittest
from unittest.mock import patch

from homeroom.models import User
from homeroom.scripts import create_user

from support import DatabaseTestCase


class TestCreateUserScript(DatabaseTestCase):
    def run_script(self, *argv: str) -> int:
        with patch.object(create_user, "SessionLocal", self.SessionLocal):
            return create_user.main(list(argv))

    def test_creates_teacher(self) -> None:
        self.assertEqual(self.run_script("teacher", "password123", "--admin", "--first-name", " Ada "), 0)
        user = self.db.query(User).filter_by(username="teacher").one()
        self.assertTrue(user.is_admin)
        self.assertEqual(user.first_name, "Ada")

    def test_duplicate_fails(self) -> None:
        self.assertEqual(self.run_script("alice", "password123"), 0)
        self.assertEqual(self.run_script("alice", "password456"), 1)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_rejects_short_password(self) -> None:
        self.assertEqual(self.run_script("alice", "short"), 1)
        self.assertEqual(self.db.query(User).count(), 0)


if __name__ == "__main__":
    unittest.main()
