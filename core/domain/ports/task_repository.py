from abc import ABC, abstractmethod

from core.domain.models.task import Task, TaskStatus


class TaskRepository(ABC):
    @abstractmethod
    def save(self, task: Task) -> Task:
        """Insert a new task with its tags and assign its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, task_id: int) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: TaskStatus) -> "list[Task]":
        raise NotImplementedError

    @abstractmethod
    def list_sorted_by_due_date(self, ascending: bool = True) -> "list[Task]":
        raise NotImplementedError

    @abstractmethod
    def update(self, task: Task) -> None:
        """Overwrite the task row and replace its tag set."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: int) -> None:
        raise NotImplementedError
