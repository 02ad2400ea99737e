from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship

from tidyhome.database import Base
from tidyhome.utils.dates import utcnow


class Task(Base):
    """Task model representing a recurring or one-time household chore."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    notes = Column(Text, nullable=True)

    # Exactly one of interval_days / due_date is meaningful, selected by is_recurring
    is_recurring = Column(Boolean, default=True, nullable=False)
    interval_days = Column(Integer, nullable=True)
    due_date = Column(Date, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    assigned_member_id = Column(Integer, ForeignKey("household_members.id", ondelete="SET NULL"), nullable=True)

    # Cache of the latest completion's completed_at, maintained by services.history
    last_completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="tasks")
    category = relationship("Category", back_populates="tasks", lazy="joined")
    assigned_member = relationship("Member", back_populates="assigned_tasks", lazy="joined")

    # One-to-many with completions
    completions = relationship(
        "Completion",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
