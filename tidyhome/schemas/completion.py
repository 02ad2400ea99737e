"""Pydantic schemas for Completion model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tidyhome.schemas.common import StoredDateTime


class CompletionCreate(BaseModel):
    """Schema for creating a new completion (marking task as done)."""
    # task_id will come from the URL path parameter
    completed_by_member_id: Optional[int] = None
    completed_at: Optional[datetime] = None  # Defaults to now
    notes: Optional[str] = None


class CompletionResponse(BaseModel):
    """Schema for completion responses."""
    id: int
    task_id: int
    completed_by_member_id: Optional[int] = None
    completed_at: StoredDateTime
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class HistoryEntry(CompletionResponse):
    """Schema for completion history with task and member names."""
    task_name: str
    is_recurring: bool
    completed_by_name: Optional[str] = None
