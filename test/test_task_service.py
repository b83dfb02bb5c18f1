import unittest
from dataclasses import replace
from datetime import date, datetime, timedelta
from unittest.mock import MagicMock

from core.application.task_service import TaskService
from core.domain.errors import PersistenceError, ValidationError
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository

NOW = datetime(2026, 3, 10, 9, 0, 0)


class InMemoryTaskRepository(TaskRepository):
    def __init__(self) -> None:
        self._data: dict[int, Task] = {}
        self._next_id = 1

    def save(self, task: Task) -> Task:
        task.id = self._next_id
        self._next_id += 1
        self._data[task.id] = replace(task, tags=list(task.tags))
        return task

    def get(self, task_id: int) -> Task | None:
        return self._data.get(task_id)

    def list(self) -> list[Task]:
        return list(self._data.values())

    def find_by_status(self, status: TaskStatus) -> "list[Task]":
        return [t for t in self._data.values() if t.status == status]

    def list_sorted_by_due_date(self, ascending: bool = True) -> "list[Task]":
        return sorted(self._data.values(), key=lambda t: t.due_date, reverse=not ascending)

    def update(self, task: Task) -> None:
        if task.id not in self._data:
            raise PersistenceError(f"Task {task.id} does not exist, nothing updated")
        self._data[task.id] = replace(task, tags=list(task.tags))

    def delete(self, task_id: int) -> None:
        if self._data.pop(task_id, None) is None:
            raise PersistenceError(f"Task {task_id} does not exist, nothing deleted")


def make_task(**overrides) -> Task:
    fields = dict(
        title="Ship release",
        description="cut v1",
        priority="high",
        due_date=NOW.date() + timedelta(days=1),
        tags=["infra", "urgent"],
    )
    fields.update(overrides)
    return Task(**fields)


class TaskServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryTaskRepository()
        self.service = TaskService(self.repo, clock=lambda: NOW)

    def test_create_returns_persisted_task_with_id_and_default_status(self) -> None:
        task = self.service.create(make_task())

        self.assertIsNotNone(task.id)
        self.assertEqual(task.status, TaskStatus.PENDING)
        self.assertEqual(self.repo.get(task.id), task)

    def test_create_invalid_task_never_reaches_repository(self) -> None:
        repo = MagicMock(spec=TaskRepository)
        service = TaskService(repo, clock=lambda: NOW)

        with self.assertRaises(ValidationError):
            service.create(make_task(due_date=date(2020, 1, 1)))

        self.assertEqual(repo.mock_calls, [])

    def test_update_without_id_fails_with_zero_store_calls(self) -> None:
        repo = MagicMock(spec=TaskRepository)
        service = TaskService(repo, clock=lambda: NOW)

        with self.assertRaises(ValidationError) as ctx:
            service.update(make_task())

        self.assertIn("ID is required", str(ctx.exception))
        self.assertEqual(repo.mock_calls, [])

    def test_update_replaces_tags(self) -> None:
        created = self.service.create(make_task())

        updated = self.service.update(replace(created, tags=["infra"]))

        self.assertEqual(updated.id, created.id)
        self.assertEqual(self.service.get(created.id).tags, ["infra"])

    def test_update_runs_validation_first(self) -> None:
        created = self.service.create(make_task())

        with self.assertRaises(ValidationError):
            self.service.update(replace(created, title=""))

        self.assertEqual(self.service.get(created.id).title, "Ship release")

    def test_reads_pass_through(self) -> None:
        later = self.service.create(make_task(due_date=NOW.date() + timedelta(days=5)))
        sooner = self.service.create(
            make_task(due_date=NOW.date() + timedelta(days=2), status=TaskStatus.COMPLETED)
        )

        self.assertEqual(len(self.service.list()), 2)
        self.assertEqual(self.service.list_by_status(TaskStatus.COMPLETED), [sooner])
        self.assertEqual(self.service.list_sorted_by_due_date(True), [sooner, later])
        self.assertEqual(self.service.list_sorted_by_due_date(False), [later, sooner])

    def test_delete_removes_task(self) -> None:
        created = self.service.create(make_task())

        self.service.delete(created.id)

        self.assertIsNone(self.service.get(created.id))

    def test_persistence_errors_propagate(self) -> None:
        repo = MagicMock(spec=TaskRepository)
        repo.save.side_effect = PersistenceError("Failed to save task")
        service = TaskService(repo, clock=lambda: NOW)

        with self.assertRaises(PersistenceError):
            service.create(make_task())


if __name__ == "__main__":
    unittest.main()
