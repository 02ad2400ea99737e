from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tidyhome.database import Base
from tidyhome.utils.dates import utcnow


class Member(Base):
    """Household member who can be assigned tasks and record completions."""

    __tablename__ = "household_members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="members")

    # Assignments and completion credits are cleared, not deleted, with the member
    assigned_tasks = relationship("Task", back_populates="assigned_member")
    completions = relationship("Completion", back_populates="completed_by")
