"""Completion history endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tidyhome.api.deps import get_current_user
from tidyhome.database import get_db
from tidyhome.models.user import User
from tidyhome.schemas.completion import HistoryEntry
from tidyhome.services import history

router = APIRouter()


@router.get("", response_model=List[HistoryEntry])
def list_history(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the current user's 100 most recent completions, newest first.

    Completions of one-time tasks stay here after the task leaves the
    task list.
    """
    entries = history.get_history_for_user(db, current_user.id)
    return [
        HistoryEntry(
            id=entry.id,
            task_id=entry.task_id,
            task_name=entry.task.name,
            is_recurring=entry.task.is_recurring,
            completed_by_member_id=entry.completed_by_member_id,
            completed_by_name=entry.completed_by.name if entry.completed_by else None,
            completed_at=entry.completed_at,
            notes=entry.notes,
        )
        for entry in entries
    ]


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_history_entry(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete one completion.

    The task's last completion time falls back to the newest remaining
    completion, or is cleared if none remain.

    Raises:
        HTTPException: 404 if the entry is missing or belongs to another user
    """
    entry = history.get_history_entry(db, entry_id, current_user.id)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="History entry not found"
        )

    history.delete_history_entry(db, entry)
    return None


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_history(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete all of the current user's completions and reset every task."""
    history.clear_history_for_user(db, current_user.id)
    return None
