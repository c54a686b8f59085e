"""Assignment store: create, update, delete and list homework items."""

import logging
from datetime import date
from typing import Any, NoReturn

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from homeroom.core.exceptions import (
    NotFoundError,
    OwnerNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from homeroom.models import Assignment, User

logger = logging.getLogger(__name__)

# Only these attributes may change after creation; owner_id is immutable.
UPDATABLE_FIELDS = frozenset({"name", "due_date"})


class AssignmentStore:
    """
    Owns Assignment records. Callers are authorized before any method runs;
    the store itself performs no role checks.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, owner_id: int, name: str, due_date: date) -> Assignment:
        """
        Append a new item to a student's list.

        Raises OwnerNotFoundError unless ``owner_id`` is an existing non-admin user.
        """
        try:
            owner = self.db.query(User).filter(User.id == owner_id).first()
            if owner is None or owner.is_admin:
                raise OwnerNotFoundError(owner_id)
            assignment = Assignment(owner_id=owner_id, name=name, due_date=due_date)
            self.db.add(assignment)
            self.db.commit()
        except DBAPIError as e:
            self._storage_failure(e, "creating assignment for owner_id=%s", owner_id)
        self.db.refresh(assignment)
        logger.info(
            "Created assignment id=%s owner_id=%s due_date=%s",
            assignment.id,
            owner_id,
            due_date.isoformat(),
        )
        return assignment

    def get(self, assignment_id: int) -> Assignment:
        """Return the item or raise NotFoundError."""
        try:
            assignment = self.db.get(Assignment, assignment_id)
        except DBAPIError as e:
            self._storage_failure(e, "reading assignment id=%s", assignment_id)
        if assignment is None:
            raise NotFoundError(f"No assignment with id {assignment_id}")
        return assignment

    def list_for_owner(self, owner_id: int) -> list[Assignment]:
        """Items owned by ``owner_id`` in creation order (empty if none)."""
        try:
            return (
                self.db.query(Assignment)
                .filter(Assignment.owner_id == owner_id)
                .order_by(Assignment.id)
                .all()
            )
        except DBAPIError as e:
            self._storage_failure(e, "listing assignments for owner_id=%s", owner_id)

    def count(self) -> int:
        try:
            return self.db.query(Assignment).count()
        except DBAPIError as e:
            self._storage_failure(e, "counting assignments")

    def update(self, assignment_id: int, fields: dict[str, Any]) -> Assignment:
        """
        Change name and/or due date of one item.

        The row is locked for the read-modify-write and committed once, so
        concurrent updates of one item serialize and the last commit wins.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}",
                location=sorted(unknown)[0],
            )
        try:
            assignment = (
                self.db.query(Assignment)
                .filter(Assignment.id == assignment_id)
                .with_for_update()
                .first()
            )
            if assignment is None:
                raise NotFoundError(f"No assignment with id {assignment_id}")
            for key, value in fields.items():
                setattr(assignment, key, value)
            self.db.commit()
        except NotFoundError:
            self.db.rollback()
            raise
        except DBAPIError as e:
            self._storage_failure(e, "updating assignment id=%s", assignment_id)
        self.db.refresh(assignment)
        logger.info("Updated assignment id=%s fields=%s", assignment_id, sorted(fields))
        return assignment

    def delete(self, assignment_id: int) -> None:
        """Remove one item. Raises NotFoundError if absent."""
        try:
            assignment = (
                self.db.query(Assignment)
                .filter(Assignment.id == assignment_id)
                .with_for_update()
                .first()
            )
            if assignment is None:
                raise NotFoundError(f"No assignment with id {assignment_id}")
            self.db.delete(assignment)
            self.db.commit()
        except NotFoundError:
            self.db.rollback()
            raise
        except DBAPIError as e:
            self._storage_failure(e, "deleting assignment id=%s", assignment_id)
        logger.info("Deleted assignment id=%s", assignment_id)

    def _storage_failure(self, error: DBAPIError, what: str, *args: object) -> NoReturn:
        self.db.rollback()
        logger.exception("Storage failure " + what, *args)
        raise StorageUnavailableError() from error
