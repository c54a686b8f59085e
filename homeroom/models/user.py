"""ORM model for accounts (teachers and students)."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from homeroom.models.base import Base


class User(Base):
    """
    Account used for login and role-based access.

    is_admin: True for teachers, False for students. Only students own assignments.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    is_admin = Column(Boolean, nullable=False, default=False)

    assignments = relationship(
        "Assignment",
        back_populates="owner",
        order_by="Assignment.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
