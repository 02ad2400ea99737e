"""Owner-scoped task queries and writes."""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tidyhome.models.task import Task
from tidyhome.schemas.task import TaskBase, TaskResponse, TaskWithStatus
from tidyhome.services.task_status import calculate_task_status
from tidyhome.utils.dates import get_today

logger = logging.getLogger(__name__)


def with_status(task: Task, today: Optional[date] = None) -> TaskWithStatus:
    """Serialize a task together with its computed status."""
    status, next_due = calculate_task_status(task, today)
    return TaskWithStatus(
        **TaskResponse.model_validate(task).model_dump(),
        status=status,
        next_due=next_due,
    )


def get_tasks_for_user(db: Session, owner_id: int, today: Optional[date] = None) -> List[TaskWithStatus]:
    """
    List the owner's active tasks with their status.

    Recurring tasks are always active. One-time tasks are active until their
    first completion, after which they only appear in the history.

    Args:
        db: Database session
        owner_id: ID of the owning user
        today: Reference day for status (default: current local date)

    Returns:
        Tasks ordered by name
    """
    today = today or get_today()
    tasks = (
        db.query(Task)
        .filter(
            Task.user_id == owner_id,
            or_(Task.is_recurring.is_(True), Task.last_completed_at.is_(None)),
        )
        .order_by(Task.name)
        .all()
    )
    return [with_status(task, today) for task in tasks]


def get_task_for_user(db: Session, task_id: int, owner_id: int) -> Optional[Task]:
    """Return the task if it exists and belongs to the owner."""
    return db.query(Task).filter(Task.id == task_id, Task.user_id == owner_id).first()


def _apply_fields(task: Task, data: TaskBase) -> None:
    """Copy editable fields, nulling whichever of interval/due date is inactive."""
    task.name = data.name.strip()
    task.notes = data.notes or None
    task.is_recurring = data.is_recurring
    task.interval_days = data.interval_days if data.is_recurring else None
    task.due_date = None if data.is_recurring else data.due_date
    task.category_id = data.category_id
    task.assigned_member_id = data.assigned_member_id


def _save(db: Session, task: Task, action: str) -> Task:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s task", action)
        raise
    db.refresh(task)
    return task


def create_task(db: Session, owner_id: int, data: TaskBase) -> Task:
    """Create a task for the owner. ``data`` must already have passed validation."""
    task = Task(user_id=owner_id)
    _apply_fields(task, data)
    db.add(task)
    task = _save(db, task, "create")
    logger.info("Created task %s for user %s", task.id, owner_id)
    return task


def update_task(db: Session, task: Task, data: TaskBase) -> Task:
    """Replace a task's editable fields. The completion cache is left alone."""
    _apply_fields(task, data)
    return _save(db, task, "update")


def delete_task(db: Session, task: Task) -> None:
    """Delete a task together with its completion history."""
    task_id = task.id
    db.delete(task)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete task %s", task_id)
        raise
    logger.info("Deleted task %s", task_id)
