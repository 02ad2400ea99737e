"""Pydantic schemas for Task model."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from tidyhome.schemas.common import StoredDateTime
from tidyhome.services.task_status import TaskStatus


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    name: Optional[str] = None
    notes: Optional[str] = None
    is_recurring: bool = True
    interval_days: Optional[int] = None
    due_date: Optional[date] = None
    category_id: Optional[int] = None
    assigned_member_id: Optional[int] = None


class TaskCreate(TaskBase):
    """Schema for creating a new task.

    Name and interval rules are checked by ``validate_task_data`` so the
    caller gets a 400 with a readable reason rather than a schema error.
    """


class TaskUpdate(TaskBase):
    """Schema for replacing a task's editable fields."""


class TaskResponse(BaseModel):
    """Schema for task responses."""
    id: int
    name: str
    notes: Optional[str] = None
    is_recurring: bool
    interval_days: Optional[int] = None
    due_date: Optional[date] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    assigned_member_id: Optional[int] = None
    assigned_member_name: Optional[str] = None
    last_completed_at: Optional[StoredDateTime] = None
    created_at: StoredDateTime

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode='before')
    @classmethod
    def extract_related_names(cls, data: Any) -> Any:
        """Flatten category and assigned member relationships."""
        if isinstance(data, dict):
            return data

        # Data is a SQLAlchemy model object (Task)
        if hasattr(data, 'category') and hasattr(data, 'assigned_member'):
            result = {}
            for field in [
                'id', 'name', 'notes', 'is_recurring', 'interval_days', 'due_date',
                'category_id', 'assigned_member_id', 'last_completed_at', 'created_at',
            ]:
                if hasattr(data, field):
                    result[field] = getattr(data, field)

            category = data.category
            result['category_name'] = category.name if category else None
            result['category_color'] = category.color if category else None

            member = data.assigned_member
            result['assigned_member_name'] = member.name if member else None

            return result

        return data


class TaskWithStatus(TaskResponse):
    """Task response with its derived status and next due instant."""
    status: TaskStatus
    next_due: datetime
