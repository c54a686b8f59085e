"""SQLAlchemy ORM models."""

from homeroom.models.assignment import Assignment
from homeroom.models.base import Base
from homeroom.models.user import User

__all__ = ["Assignment", "Base", "User"]
