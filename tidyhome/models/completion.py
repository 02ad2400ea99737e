from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from tidyhome.database import Base
from tidyhome.utils.dates import utcnow


class Completion(Base):
    """Completion model: one audit-log entry per time a task was done."""

    __tablename__ = "task_completions"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    completed_by_member_id = Column(
        Integer, ForeignKey("household_members.id", ondelete="SET NULL"), nullable=True
    )
    completed_at = Column(DateTime, default=utcnow, nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    task = relationship("Task", back_populates="completions")
    completed_by = relationship("Member", back_populates="completions")

    # Indexes for optimized queries
    __table_args__ = (
        # Composite index for finding most recent completion per task
        Index("ix_task_completions_task_time", "task_id", "completed_at"),
    )
