"""Credential store: account creation, password verification, and lookups."""

import logging
from typing import Any

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, selectinload

from homeroom.core.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFoundError,
    StorageUnavailableError,
)
from homeroom.core.security import dummy_password_hash, hash_password, verify_password
from homeroom.models import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Owns User records. Performs no role checks."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_user(
        self,
        username: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        is_admin: bool = False,
    ) -> User:
        """
        Store a new account with a bcrypt hash of ``password``.

        Raises DuplicateUsernameError if the username is taken, including when
        a concurrent signup wins the unique index race.
        """
        try:
            if self.get_user_by_username(username) is not None:
                raise DuplicateUsernameError(username)
            user = User(
                username=username,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                is_admin=is_admin,
            )
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsernameError(username) from e
        except DBAPIError as e:
            self.db.rollback()
            logger.exception("Storage failure creating user %s", username)
            raise StorageUnavailableError() from e
        self.db.refresh(user)
        logger.info("Created user id=%s username=%s is_admin=%s", user.id, user.username, user.is_admin)
        return user

    def verify_credentials(self, username: str, password: str) -> User:
        """
        Return the account matching username and password.

        Unknown usernames still pay for one bcrypt check against a dummy hash,
        and both failure paths raise the same InvalidCredentialsError.
        """
        user = self.get_user_by_username(username)
        if user is None:
            verify_password(password, dummy_password_hash())
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentialsError()
        return user

    def list_users(self) -> list[User]:
        """All users ordered by id, with assignments loaded."""
        return self._run(
            lambda: self.db.query(User)
            .options(selectinload(User.assignments))
            .order_by(User.id)
            .all()
        )

    def get_user(self, user_id: int) -> User:
        """Return the user or raise NotFoundError."""
        user = self._run(
            lambda: self.db.query(User)
            .options(selectinload(User.assignments))
            .filter(User.id == user_id)
            .first()
        )
        if user is None:
            raise NotFoundError(f"No user with id {user_id}")
        return user

    def get_user_by_username(self, username: str) -> User | None:
        return self._run(
            lambda: self.db.query(User).filter(User.username == username).first()
        )

    def count_users(self, is_admin: bool) -> int:
        """Number of teacher (``is_admin=True``) or student accounts."""
        return self._run(lambda: self.db.query(User).filter_by(is_admin=is_admin).count())

    def _run(self, query: Any) -> Any:
        try:
            return query()
        except DBAPIError as e:
            self.db.rollback()
            logger.exception("Storage failure reading users")
            raise StorageUnavailableError() from e
