import logging
from datetime import datetime
from typing import Callable

from core.domain.errors import ValidationError
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from core.domain.validation import validate_task

logger = logging.getLogger(__name__)


class TaskService:
    """
    Entry point for the adapters: validates writes and delegates to the
    repository. Reads and deletes go straight through.
    """

    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def create(self, task: Task) -> Task:
        validate_task(task, now=self._clock())
        saved = self._repository.save(task)
        logger.info(f"Task {saved.id} created")
        return saved

    def update(self, task: Task) -> Task:
        validate_task(task, now=self._clock())
        if task.id is None:
            raise ValidationError("Task ID is required for update")
        self._repository.update(task)
        logger.info(f"Task {task.id} updated")
        return task

    def get(self, task_id: int) -> Task | None:
        return self._repository.get(task_id)

    def list(self) -> list[Task]:
        return self._repository.list()

    def list_by_status(self, status: TaskStatus) -> "list[Task]":
        return self._repository.find_by_status(status)

    def list_sorted_by_due_date(self, ascending: bool = True) -> "list[Task]":
        return self._repository.list_sorted_by_due_date(ascending)

    def delete(self, task_id: int) -> None:
        self._repository.delete(task_id)
        logger.info(f"Task {task_id} deleted")
