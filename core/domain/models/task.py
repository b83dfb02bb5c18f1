from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class TaskStatus(Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(slots=True)
class Task:
    title: str | None = None
    description: str | None = None
    priority: str | None = None
    due_date: date | None = None
    # None until validated, then PENDING unless set
    status: TaskStatus | None = None
    # Tag names; order carries no meaning, the store collapses duplicates.
    tags: list[str] = field(default_factory=list)
    id: int | None = None
