"""Tests for homeroom.services.credential_store against an in-memory database."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from homeroom.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFoundError,
    StorageUnavailableError,
)
from homeroom.schemas.users import UserOut
from homeroom.services.credential_store import CredentialStore

from support import DatabaseTestCase


class TestCreateUser(DatabaseTestCase):
    """Signup stores a hash and refuses duplicate usernames."""

    def setUp(self) -> None:
        super().setUp()
        self.store = CredentialStore(self.db)

    def test_stores_hash_not_plaintext(self) -> None:
        user = self.store.create_user("alice", "password123", first_name="Alice")
        self.assertIsNotNone(user.id)
        self.assertNotEqual(user.password_hash, "password123")
        self.assertEqual(user.first_name, "Alice")
        self.assertFalse(user.is_admin)

    def test_second_signup_with_same_username_fails(self) -> None:
        self.store.create_user("alice", "password123")
        with self.assertRaises(DuplicateUsernameError) as ctx:
            self.store.create_user("alice", "different-password")
        self.assertEqual(ctx.exception.location, "username")

    def test_usernames_are_case_sensitive(self) -> None:
        self.store.create_user("alice", "password123")
        user = self.store.create_user("Alice", "password123")
        self.assertEqual(user.username, "Alice")

    def test_serialized_user_has_no_password(self) -> None:
        user = self.store.create_user("alice", "password123")
        body = UserOut.model_validate(user).model_dump(by_alias=True)
        self.assertNotIn("password", str(body).lower())
        self.assertEqual(body["assignments"], [])


class TestVerifyCredentials(DatabaseTestCase):
    """Wrong password and unknown username fail the same way."""

    def setUp(self) -> None:
        super().setUp()
        self.store = CredentialStore(self.db)
        self.store.create_user("alice", "password123")

    def test_correct_password(self) -> None:
        self.assertEqual(self.store.verify_credentials("alice", "password123").username, "alice")

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as wrong:
            self.store.verify_credentials("alice", "not-the-password")
        with self.assertRaises(InvalidCredentialsError) as unknown:
            self.store.verify_credentials("mallory", "password123")
        self.assertEqual(type(wrong.exception), type(unknown.exception))
        self.assertEqual(wrong.exception.message, unknown.exception.message)
        self.assertEqual(wrong.exception.code, unknown.exception.code)

    @patch("homeroom.services.credential_store.verify_password", return_value=False)
    def test_unknown_user_still_checks_a_hash(self, mock_verify: MagicMock) -> None:
        with self.assertRaises(InvalidCredentialsError):
            self.store.verify_credentials("mallory", "password123")
        mock_verify.assert_called_once()


class TestLookups(DatabaseTestCase):
    """get_user and list_users."""

    def setUp(self) -> None:
        super().setUp()
        self.store = CredentialStore(self.db)

    def test_get_missing_user(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.get_user(12345)

    def test_list_users_in_creation_order(self) -> None:
        for name in ("teacher", "alice", "bob"):
            self.store.create_user(name, "password123", is_admin=(name == "teacher"))
        self.assertEqual([u.username for u in self.store.list_users()], ["teacher", "alice", "bob"])


class TestStorageFailure(unittest.TestCase):
    """Database errors surface as StorageUnavailableError without their detail."""

    def test_list_users_when_database_down(self) -> None:
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        with self.assertRaises(StorageUnavailableError) as ctx:
            CredentialStore(session).list_users()
        self.assertNotIn("connection refused", ctx.exception.message)
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
