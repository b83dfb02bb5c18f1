from datetime import datetime

from core.domain.errors import ValidationError
from core.domain.models.task import Task, TaskStatus


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _same_kind(now: datetime, due: datetime) -> datetime:
    # Aware and naive datetimes cannot be compared; naive values are local time.
    if due.tzinfo is not None:
        return now.astimezone(due.tzinfo)
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def validate_task(task: Task, now: datetime | None = None) -> None:
    """
    Check a task against the business rules before it is written.

    Fails on the first broken rule with a ValidationError. A task without a
    status is defaulted to PENDING.

    `due_date` may be a `date` or a `datetime`. A `datetime` is compared to
    the wall clock, so a value equal to `now` passes and anything earlier
    fails; timezone-aware and naive values can be mixed. A plain `date` is
    compared to today's date.
    """
    if _is_blank(task.title):
        raise ValidationError("Task title is required")

    if _is_blank(task.description):
        raise ValidationError("Task description is required")

    if _is_blank(task.priority):
        raise ValidationError("Task priority is required")

    if task.due_date is None:
        raise ValidationError("Due date is required")

    now = now or datetime.now()
    if isinstance(task.due_date, datetime):
        in_past = task.due_date < _same_kind(now, task.due_date)
    else:
        in_past = task.due_date < now.date()
    if in_past:
        raise ValidationError("Due date cannot be in the past")

    if task.status is None:
        task.status = TaskStatus.PENDING
