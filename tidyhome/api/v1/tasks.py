"""Task management endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tidyhome.api.deps import get_current_user, get_owned_task
from tidyhome.database import get_db
from tidyhome.models.category import Category
from tidyhome.models.member import Member
from tidyhome.models.task import Task
from tidyhome.models.user import User
from tidyhome.schemas.completion import CompletionCreate, CompletionResponse
from tidyhome.schemas.task import TaskBase, TaskCreate, TaskUpdate, TaskWithStatus
from tidyhome.services import history, tasks as task_service
from tidyhome.services.task_status import validate_task_data

router = APIRouter()


def verify_member_ownership(member_id: int, user_id: int, db: Session) -> None:
    """
    Verify a household member belongs to the user.

    Raises:
        HTTPException: 404 if the member is missing or owned by someone else
    """
    member = db.query(Member).filter(Member.id == member_id, Member.user_id == user_id).first()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )


def verify_task_input(task_data: TaskBase, user_id: int, db: Session) -> None:
    """
    Validate task fields and the category/member they point at.

    Raises:
        HTTPException: 400 with the reason if validation fails,
            404 if a referenced category or member is not the user's
    """
    validation = validate_task_data(task_data)
    if not validation.valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation.error
        )

    if task_data.category_id is not None:
        category = db.query(Category).filter(
            Category.id == task_data.category_id,
            Category.user_id == user_id
        ).first()
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found"
            )

    if task_data.assigned_member_id is not None:
        verify_member_ownership(task_data.assigned_member_id, user_id, db)


@router.get("", response_model=List[TaskWithStatus])
def list_tasks(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the current user's active tasks with their status.

    Completed one-time tasks are not included; they are visible in the
    completion history.
    """
    return task_service.get_tasks_for_user(db, current_user.id)


@router.post("", response_model=TaskWithStatus, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a new task.

    Args:
        task_data: Task fields; recurring tasks need a positive interval_days
        current_user: Authenticated user
        db: Database session

    Returns:
        Created task with its status

    Raises:
        HTTPException: 400 if validation fails, 404 for unknown category/member
    """
    verify_task_input(task_data, current_user.id, db)
    task = task_service.create_task(db, current_user.id, task_data)
    return task_service.with_status(task)


@router.get("/{task_id}", response_model=TaskWithStatus)
def get_task(task: Task = Depends(get_owned_task)):
    """Get a single task with its status."""
    return task_service.with_status(task)


@router.put("/{task_id}", response_model=TaskWithStatus)
def update_task(
    task_data: TaskUpdate,
    task: Task = Depends(get_owned_task),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Replace a task's editable fields.

    Switching between recurring and one-time clears whichever of
    interval_days/due_date no longer applies. Completion history is kept.

    Raises:
        HTTPException: 404 if the task is not found, 400 if validation fails
    """
    verify_task_input(task_data, current_user.id, db)
    task = task_service.update_task(db, task, task_data)
    return task_service.with_status(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task: Task = Depends(get_owned_task),
    db: Session = Depends(get_db)
):
    """Delete a task and its completion history."""
    task_service.delete_task(db, task)
    return None


@router.post("/{task_id}/complete", response_model=CompletionResponse, status_code=status.HTTP_201_CREATED)
def complete_task(
    completion_data: Optional[CompletionCreate] = None,
    task: Task = Depends(get_owned_task),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Mark a task as done.

    Args:
        completion_data: Optional completer, timestamp (defaults to now) and notes
        task: Task from the path, owned by the current user
        current_user: Authenticated user
        db: Database session

    Returns:
        The completion record

    Raises:
        HTTPException: 404 if the task or completer is not found
    """
    completion_data = completion_data or CompletionCreate()
    if completion_data.completed_by_member_id:
        verify_member_ownership(completion_data.completed_by_member_id, current_user.id, db)

    return history.complete_task(db, task, completion_data)
