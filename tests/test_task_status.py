from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from tidyhome.services.task_status import (
    MAX_INTERVAL_DAYS,
    TaskStatus,
    calculate_task_status,
    validate_task_data,
)

TODAY = date(2024, 3, 15)


def make_task(**fields):
    task = {
        "is_recurring": True,
        "last_completed_at": None,
        "interval_days": 7,
        "due_date": None,
    }
    task.update(fields)
    return SimpleNamespace(**task)


def local(year, month, day, hour=9, minute=0):
    """Aware datetime on the local wall clock."""
    return datetime(year, month, day, hour, minute).astimezone()


class TestOneTimeTasks:
    def test_without_due_date_is_pending_today(self):
        result = calculate_task_status(make_task(is_recurring=False, interval_days=None), TODAY)
        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == TODAY

    def test_due_today_is_pending(self):
        result = calculate_task_status(make_task(is_recurring=False, due_date=TODAY), TODAY)
        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == TODAY

    def test_due_in_future_is_pending(self):
        result = calculate_task_status(make_task(is_recurring=False, due_date=date(2024, 4, 1)), TODAY)
        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == date(2024, 4, 1)

    def test_due_yesterday_is_overdue(self):
        result = calculate_task_status(make_task(is_recurring=False, due_date=date(2024, 3, 14)), TODAY)
        assert result.status == TaskStatus.OVERDUE
        assert result.next_due.date() == date(2024, 3, 14)

    def test_due_date_as_iso_string(self):
        result = calculate_task_status(make_task(is_recurring=False, due_date="2024-03-14"), TODAY)
        assert result.status == TaskStatus.OVERDUE

    def test_never_done_even_when_completed(self):
        task = make_task(is_recurring=False, due_date=date(2024, 3, 20), last_completed_at=local(2024, 3, 14))
        assert calculate_task_status(task, TODAY).status == TaskStatus.PENDING

    @pytest.mark.parametrize("offset_days", [-400, -1, 0, 1, 400])
    def test_without_due_date_is_always_pending(self, offset_days):
        today = date.fromordinal(TODAY.toordinal() + offset_days)
        result = calculate_task_status(make_task(is_recurring=False), today)
        assert result.status == TaskStatus.PENDING


class TestRecurringTasks:
    def test_never_completed_is_overdue_today(self):
        result = calculate_task_status(make_task(), TODAY)
        assert result.status == TaskStatus.OVERDUE
        assert result.next_due.date() == TODAY

    def test_interval_elapsed_today_is_pending(self):
        result = calculate_task_status(make_task(last_completed_at=local(2024, 3, 8)), TODAY)
        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == date(2024, 3, 15)

    def test_interval_long_past_is_overdue(self):
        result = calculate_task_status(make_task(last_completed_at=local(2024, 3, 1)), TODAY)
        assert result.status == TaskStatus.OVERDUE
        assert result.next_due.date() == date(2024, 3, 8)

    def test_completed_yesterday_is_done(self):
        result = calculate_task_status(make_task(last_completed_at=local(2024, 3, 14)), TODAY)
        assert result.status == TaskStatus.DONE
        assert result.next_due.date() == date(2024, 3, 21)

    def test_time_of_day_does_not_matter(self):
        early = make_task(last_completed_at=local(2024, 3, 8, 0, 5))
        late = make_task(last_completed_at=local(2024, 3, 8, 23, 55))
        assert calculate_task_status(early, TODAY).status == TaskStatus.PENDING
        assert calculate_task_status(late, TODAY).status == TaskStatus.PENDING

    def test_next_due_keeps_time_of_completion(self):
        result = calculate_task_status(make_task(last_completed_at=local(2024, 3, 14, 18, 30)), TODAY)
        assert (result.next_due.hour, result.next_due.minute) == (18, 30)

    @pytest.mark.parametrize(
        "interval_days, last_day, expected",
        [
            (1, 14, TaskStatus.PENDING),
            (1, 13, TaskStatus.OVERDUE),
            (1, 15, TaskStatus.DONE),
            (30, 1, TaskStatus.DONE),
            (14, 1, TaskStatus.PENDING),
            (13, 1, TaskStatus.OVERDUE),
        ],
    )
    def test_different_intervals(self, interval_days, last_day, expected):
        task = make_task(interval_days=interval_days, last_completed_at=local(2024, 3, last_day))
        assert calculate_task_status(task, TODAY).status == expected

    def test_zero_interval_completed_today_is_pending(self):
        task = make_task(interval_days=0, last_completed_at=local(2024, 3, 15))
        assert calculate_task_status(task, TODAY).status == TaskStatus.PENDING

    def test_month_and_leap_day_boundaries(self):
        task = make_task(interval_days=1, last_completed_at=local(2024, 2, 28))
        result = calculate_task_status(task, date(2024, 2, 29))
        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == date(2024, 2, 29)

        task = make_task(interval_days=2, last_completed_at=local(2024, 2, 28))
        assert calculate_task_status(task, date(2024, 3, 1)).next_due.date() == date(2024, 3, 1)

    def test_last_completed_as_date(self):
        task = make_task(last_completed_at=date(2024, 3, 8))
        result = calculate_task_status(task, TODAY)
        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == TODAY

    def test_naive_timestamp_is_read_as_utc(self):
        stored = datetime(2024, 3, 8, 12, 0)
        expected_day = stored.replace(tzinfo=timezone.utc).astimezone().date()
        result = calculate_task_status(make_task(last_completed_at=stored), TODAY)
        assert result.next_due.date() == date.fromordinal(expected_day.toordinal() + 7)

    def test_iso_string_timestamp(self):
        instant = local(2024, 3, 8).isoformat()
        assert calculate_task_status(make_task(last_completed_at=instant), TODAY).status == TaskStatus.PENDING

    @pytest.mark.parametrize("interval_days", [10**7, 10**10])
    def test_interval_beyond_calendar_is_done(self, interval_days):
        task = make_task(interval_days=interval_days, last_completed_at=datetime(2024, 3, 8, 12))
        result = calculate_task_status(task, TODAY)
        assert result.status == TaskStatus.DONE
        assert result.next_due.date() == date.max
        assert result.next_due.tzinfo is not None


class TestDaylightSaving:
    def test_interval_across_spring_forward_keeps_wall_clock(self, local_timezone):
        local_timezone("America/New_York")
        # Clocks jump forward on 2024-03-10
        task = make_task(interval_days=2, last_completed_at=local(2024, 3, 9, 9, 0))

        result = calculate_task_status(task, date(2024, 3, 11))

        assert result.status == TaskStatus.PENDING
        assert result.next_due.date() == date(2024, 3, 11)
        assert result.next_due.hour == 9

    def test_just_after_midnight_across_fall_back(self, local_timezone):
        local_timezone("Europe/Berlin")
        # Clocks go back on 2024-10-27; adding 24 hours would land at 23:30 on the 26th
        task = make_task(interval_days=1, last_completed_at=local(2024, 10, 26, 0, 30))

        result = calculate_task_status(task, date(2024, 10, 27))

        assert result.next_due.date() == date(2024, 10, 27)
        assert (result.next_due.hour, result.next_due.minute) == (0, 30)
        assert result.status == TaskStatus.PENDING


class TestPurity:
    def test_same_input_same_output(self):
        task = make_task(last_completed_at=local(2024, 3, 10))
        assert calculate_task_status(task, TODAY) == calculate_task_status(task, TODAY)

    def test_today_as_datetime_is_truncated(self):
        task = make_task(last_completed_at=local(2024, 3, 8))
        result = calculate_task_status(task, datetime(2024, 3, 15, 17, 45))
        assert result.status == TaskStatus.PENDING

    def test_defaults_to_current_day(self):
        task = make_task(last_completed_at=datetime.now().astimezone())
        assert calculate_task_status(task).status == TaskStatus.DONE


class TestValidateTaskData:
    def test_valid_recurring_task(self):
        result = validate_task_data({"name": "Vacuum", "is_recurring": True, "interval_days": 7})
        assert result.valid
        assert result.error is None

    def test_valid_one_time_task(self):
        assert validate_task_data({"name": "Fix fence", "is_recurring": False}).valid

    def test_missing_name(self):
        result = validate_task_data({"is_recurring": False})
        assert not result.valid
        assert result.error == "Name is required"

    def test_blank_name(self):
        assert validate_task_data({"name": "   ", "is_recurring": False}).error == "Name is required"

    def test_recurring_without_interval(self):
        result = validate_task_data({"name": "Vacuum", "is_recurring": True})
        assert not result.valid
        assert result.error == "Interval is required for recurring tasks"

    @pytest.mark.parametrize("interval_days", [0, -3])
    def test_recurring_with_non_positive_interval(self, interval_days):
        assert not validate_task_data({"name": "Vacuum", "interval_days": interval_days}).valid

    def test_recurrence_defaults_to_true(self):
        assert not validate_task_data({"name": "Vacuum"}).valid
        assert validate_task_data({"name": "Vacuum", "interval_days": 3}).valid

    def test_accepts_objects(self):
        assert validate_task_data(SimpleNamespace(name="Dust", is_recurring=True, interval_days=2)).valid

    def test_interval_upper_bound(self):
        assert validate_task_data({"name": "Descale", "interval_days": MAX_INTERVAL_DAYS}).valid

        result = validate_task_data({"name": "Descale", "interval_days": MAX_INTERVAL_DAYS + 1})
        assert not result.valid
        assert result.error == "Interval is too large"

    def test_upper_bound_ignores_one_time_tasks(self):
        assert validate_task_data({"name": "Fix fence", "is_recurring": False, "interval_days": 10**7}).valid
