"""ORM model for homework items assigned to a student."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from homeroom.models.base import Base


class Assignment(Base):
    """
    One homework item owned by exactly one student.

    Ids grow with creation, so ordering by id gives display order.
    """

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    due_date = Column(Date, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    owner = relationship("User", back_populates="assignments")
