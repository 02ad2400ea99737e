"""Task status calculation and task validation.

``calculate_task_status`` is a pure function of a task's recurrence fields
and a reference day. It never reads the clock when ``today`` is supplied,
so callers (and tests) get deterministic results by passing a fixed day.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, NamedTuple, Optional

from tidyhome.utils.dates import (
    add_days,
    get_today,
    normalize_to_day,
    parse_instant,
    start_of_day,
)

# About a century; longer intervals are not chores
MAX_INTERVAL_DAYS = 36500


class TaskStatus(str, Enum):
    """Derived lifecycle state of a task. Never stored."""

    DONE = "done"
    PENDING = "pending"
    OVERDUE = "overdue"


class TaskStatusResult(NamedTuple):
    status: TaskStatus
    next_due: datetime


class TaskValidation(NamedTuple):
    valid: bool
    error: Optional[str] = None


def calculate_task_status(task: Any, today: Optional[date] = None) -> TaskStatusResult:
    """
    Calculate the status and next due instant of a task.

    Args:
        task: Object exposing ``is_recurring``, ``last_completed_at``,
            ``interval_days`` and ``due_date`` (an ORM row works)
        today: Reference day; defaults to the current local date. A datetime
            is truncated to its own calendar date.

    Returns:
        TaskStatusResult with the status and an aware local next-due datetime

    The day on which a recurring task's interval has exactly elapsed is
    always ``pending``.
    """
    if today is None:
        today = get_today()
    elif isinstance(today, datetime):
        today = today.date()

    # One-time tasks: never "done" here, completed ones drop out of the listing
    if not task.is_recurring:
        if not task.due_date:
            return TaskStatusResult(TaskStatus.PENDING, start_of_day(today))

        due_day = normalize_to_day(task.due_date)
        status = TaskStatus.PENDING if due_day >= today else TaskStatus.OVERDUE
        return TaskStatusResult(status, start_of_day(due_day))

    # Recurring tasks without history are due immediately
    if not task.last_completed_at:
        return TaskStatusResult(TaskStatus.OVERDUE, start_of_day(today))

    last_completed = parse_instant(task.last_completed_at)
    if not isinstance(last_completed, datetime):
        last_completed = start_of_day(last_completed)

    try:
        next_due = add_days(last_completed, task.interval_days or 0)
    except OverflowError:
        # Past the last representable day: due never comes
        next_due = datetime.combine(date.max, time.min, tzinfo=start_of_day(today).tzinfo)
    next_due_day = next_due.date()

    if next_due_day > today:
        status = TaskStatus.DONE
    elif next_due_day == today:
        status = TaskStatus.PENDING
    else:
        status = TaskStatus.OVERDUE

    return TaskStatusResult(status, next_due)


def validate_task_data(data: Any) -> TaskValidation:
    """
    Check the fields a task needs before it can be saved.

    Accepts a mapping or any object with ``name``, ``is_recurring`` and
    ``interval_days`` attributes. A missing recurrence flag means recurring.
    """
    if isinstance(data, dict):
        name = data.get("name")
        is_recurring = data.get("is_recurring")
        interval_days = data.get("interval_days")
    else:
        name = getattr(data, "name", None)
        is_recurring = getattr(data, "is_recurring", None)
        interval_days = getattr(data, "interval_days", None)

    if is_recurring is None:
        is_recurring = True

    if not name or not str(name).strip():
        return TaskValidation(False, "Name is required")
    if is_recurring and (interval_days is None or interval_days <= 0):
        return TaskValidation(False, "Interval is required for recurring tasks")
    if is_recurring and interval_days > MAX_INTERVAL_DAYS:
        return TaskValidation(False, "Interval is too large")
    return TaskValidation(True)
