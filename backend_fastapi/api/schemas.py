from dataclasses import dataclass, field
from datetime import date

from core.domain.models.task import Task, TaskStatus


def split_tags(tags: list[str] | str | None) -> list[str]:
    """Accept a list or a comma separated string such as "infra, urgent"."""
    if tags is None:
        return []
    if isinstance(tags, str):
        return [name.strip() for name in tags.split(",") if name.strip()]
    return list(tags)


@dataclass(slots=True)
class TaskPayload:
    title: str | None = None
    description: str | None = None
    priority: str | None = None
    due_date: date | None = None
    status: TaskStatus | None = None
    tags: list[str] | str | None = field(default_factory=list)

    def to_task(self, task_id: int | None = None) -> Task:
        return Task(
            id=task_id,
            title=self.title,
            description=self.description,
            priority=self.priority,
            due_date=self.due_date,
            status=self.status,
            tags=split_tags(self.tags),
        )
