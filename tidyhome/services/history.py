"""Completion history and the task ``last_completed_at`` cache.

``Task.last_completed_at`` duplicates the newest ``Completion.completed_at``
of that task so listings can compute status without touching the log. Every
write to ``task_completions`` goes through this module, and each one
refreshes the cache in the same transaction, so the cache always equals the
latest surviving completion.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from tidyhome.models.completion import Completion
from tidyhome.models.task import Task
from tidyhome.schemas.completion import CompletionCreate
from tidyhome.utils.dates import to_storage, utcnow

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100


def refresh_last_completed(db: Session, task_id: int) -> None:
    """Set a task's cached completion time to its newest surviving completion, or NULL."""
    latest = select(func.max(Completion.completed_at)).where(
        Completion.task_id == task_id
    ).scalar_subquery()
    db.execute(
        update(Task)
        .where(Task.id == task_id)
        .values(last_completed_at=latest)
        .execution_options(synchronize_session=False)
    )


def complete_task(db: Session, task: Task, data: CompletionCreate) -> Completion:
    """
    Record a completion of ``task`` and update its cached completion time.

    Args:
        db: Database session
        task: Task already verified to belong to the caller
        data: Completer, optional timestamp (defaults to now) and notes

    Returns:
        The stored completion record

    Raises:
        SQLAlchemyError: If the write fails; nothing is persisted
    """
    completed_at = to_storage(data.completed_at) if data.completed_at else utcnow()

    completion = Completion(
        task_id=task.id,
        completed_by_member_id=data.completed_by_member_id or None,
        completed_at=completed_at,
        notes=data.notes or None,
    )

    try:
        db.add(completion)
        db.flush()
        refresh_last_completed(db, task.id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record completion for task %s", task.id)
        raise

    db.refresh(completion)
    db.refresh(task)
    logger.info("Task %s completed at %s", task.id, completed_at.isoformat())
    return completion


def get_history_for_user(db: Session, owner_id: int, limit: int = HISTORY_LIMIT) -> List[Completion]:
    """Return the owner's most recent completions, newest first."""
    return (
        db.query(Completion)
        .join(Task, Completion.task_id == Task.id)
        .options(joinedload(Completion.task), joinedload(Completion.completed_by))
        .filter(Task.user_id == owner_id)
        .order_by(Completion.completed_at.desc(), Completion.id.desc())
        .limit(limit)
        .all()
    )


def get_history_entry(db: Session, entry_id: int, owner_id: int) -> Optional[Completion]:
    """Return a completion only if its task belongs to the owner."""
    return (
        db.query(Completion)
        .join(Task, Completion.task_id == Task.id)
        .filter(Completion.id == entry_id, Task.user_id == owner_id)
        .first()
    )


def delete_history_entry(db: Session, entry: Completion) -> None:
    """
    Delete one completion and recompute its task's cached completion time.

    The delete and the recompute commit together; on failure both are
    rolled back.
    """
    entry_id, task_id = entry.id, entry.task_id
    try:
        db.execute(delete(Completion).where(Completion.id == entry_id))
        refresh_last_completed(db, task_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete history entry %s", entry_id)
        raise

    db.expire_all()
    logger.info("Deleted history entry %s of task %s", entry_id, task_id)


def clear_history_for_user(db: Session, owner_id: int) -> int:
    """
    Delete every completion of the owner's tasks and reset their caches.

    Returns:
        Number of completion records removed
    """
    owned_task_ids = select(Task.id).where(Task.user_id == owner_id)
    try:
        result = db.execute(
            delete(Completion)
            .where(Completion.task_id.in_(owned_task_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            update(Task)
            .where(Task.user_id == owner_id)
            .values(last_completed_at=None)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to clear history for user %s", owner_id)
        raise

    db.expire_all()
    logger.info("Cleared %s history entries for user %s", result.rowcount, owner_id)
    return result.rowcount
