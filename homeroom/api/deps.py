"""Request-scoped store dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from homeroom.core.database import get_db
from homeroom.services.assignment_store import AssignmentStore
from homeroom.services.credential_store import CredentialStore


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return CredentialStore(db)


def get_assignment_store(db: Annotated[Session, Depends(get_db)]) -> AssignmentStore:
    return AssignmentStore(db)


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
AssignmentStoreDep = Annotated[AssignmentStore, Depends(get_assignment_store)]
