import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterable, Iterator

from peewee import JOIN, Database, PeeweeException

from core.domain.errors import PersistenceError
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import (
    MODELS,
    TagModel,
    TaskModel,
    TaskTagModel,
    init_db,
)

logger = logging.getLogger(__name__)


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Strip names, drop blanks and collapse duplicates keeping first-seen order."""
    names = (name.strip() for name in tags or () if name)
    return list(dict.fromkeys(name for name in names if name))


def _as_date(value: date | None) -> date | None:
    return value.date() if isinstance(value, datetime) else value


class PeeweeTaskRepository(TaskRepository):
    """
    Task store on a relational database through peewee.

    Each call binds the models to `database`, acquires a connection and
    releases both before returning, so repositories on different databases
    never see each other's data. Writes run in a single transaction that
    covers the task row and its tag associations, so a failure never leaves
    one without the other.

    `save` and `update` leave the task holding what was stored: tag names
    normalised and the due date reduced to a date.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        try:
            init_db(database)
        except PeeweeException as exc:
            logger.error(f"🔴 Could not prepare task tables: {exc}")
            raise PersistenceError("Failed to initialise task tables") from exc

    @contextmanager
    def _scope(self, action: str, transactional: bool = False) -> Iterator[None]:
        try:
            with self._db.bind_ctx(MODELS), self._db.connection_context():
                if transactional:
                    with self._db.atomic():
                        yield
                else:
                    yield
        except PeeweeException as exc:
            logger.error(f"❌ Failed to {action}: {exc}")
            raise PersistenceError(f"Failed to {action}") from exc

    # ---- writes ----

    def save(self, task: Task) -> Task:
        tags = normalize_tags(task.tags)
        due_date = _as_date(task.due_date)
        with self._scope("save task", transactional=True):
            task_id = TaskModel.insert(**self._columns(task, due_date)).execute()
            if not task_id:
                raise PersistenceError("Creating task failed, no row inserted")
            self._replace_tags(task_id, tags)
        task.id, task.tags, task.due_date = task_id, tags, due_date
        logger.debug(f"Saved task {task_id} with tags {tags}")
        return task

    def update(self, task: Task) -> None:
        tags = normalize_tags(task.tags)
        due_date = _as_date(task.due_date)
        with self._scope(f"update task {task.id}", transactional=True):
            updated = (
                TaskModel.update(**self._columns(task, due_date))
                .where(TaskModel.id == task.id)
                .execute()
            )
            if updated == 0:
                raise PersistenceError(f"Task {task.id} does not exist, nothing updated")
            self._replace_tags(task.id, tags)
        task.tags, task.due_date = tags, due_date
        logger.debug(f"Updated task {task.id} with tags {tags}")

    def delete(self, task_id: int) -> None:
        # task_tags rows go with the task via ON DELETE CASCADE
        with self._scope(f"delete task {task_id}", transactional=True):
            deleted = TaskModel.delete().where(TaskModel.id == task_id).execute()
            if deleted == 0:
                raise PersistenceError(f"Task {task_id} does not exist, nothing deleted")

    def _replace_tags(self, task_id: int, tags: list[str]) -> None:
        # Must run inside the caller's write transaction; `tags` is already normalised.
        TaskTagModel.delete().where(TaskTagModel.task == task_id).execute()
        for name in tags:
            TagModel.insert(name=name).on_conflict_ignore().execute()
            tag_id = TagModel.select(TagModel.id).where(TagModel.name == name).scalar()
            TaskTagModel.insert(task=task_id, tag=tag_id).execute()

    @staticmethod
    def _columns(task: Task, due_date: date | None) -> dict:
        return {
            "title": task.title,
            "description": task.description,
            "priority": task.priority,
            "due_date": due_date,
            "status": task.status.name if task.status else None,
        }

    # ---- reads ----
    # Queries are built inside the scope: a model query picks up its database
    # when it is created.

    def get(self, task_id: int) -> Task | None:
        with self._scope(f"find task {task_id}"):
            tasks = self._group_rows(self._select().where(TaskModel.id == task_id))
        return tasks[0] if tasks else None

    def list(self) -> list[Task]:
        with self._scope("list tasks"):
            return self._group_rows(self._select().order_by(TaskModel.id, TagModel.name))

    def find_by_status(self, status: TaskStatus) -> "list[Task]":
        with self._scope(f"find tasks by status {status.name}"):
            query = (
                self._select()
                .where(TaskModel.status == status.name)
                .order_by(TaskModel.id, TagModel.name)
            )
            return self._group_rows(query)

    def list_sorted_by_due_date(self, ascending: bool = True) -> "list[Task]":
        due_date = TaskModel.due_date.asc() if ascending else TaskModel.due_date.desc()
        with self._scope("sort tasks by due date"):
            # Equal due dates fall back to id order.
            query = self._select().order_by(due_date, TaskModel.id, TagModel.name)
            return self._group_rows(query)

    @staticmethod
    def _select():
        return (
            TaskModel.select(TaskModel, TagModel.name.alias("tag_name"))
            .join(TaskTagModel, JOIN.LEFT_OUTER, on=(TaskTagModel.task == TaskModel.id))
            .join(TagModel, JOIN.LEFT_OUTER, on=(TaskTagModel.tag == TagModel.id))
            .dicts()
        )

    @staticmethod
    def _group_rows(rows) -> "list[Task]":
        # One row per (task, tag) pair; rows of a task are folded into one Task.
        tasks: dict[int, Task] = {}
        for row in rows:
            task = tasks.get(row["id"])
            if task is None:
                task = tasks[row["id"]] = Task(
                    id=row["id"],
                    title=row["title"],
                    description=row["description"],
                    priority=row["priority"],
                    due_date=row["due_date"],
                    status=TaskStatus[row["status"]],
                )
            if row["tag_name"] is not None:
                task.tags.append(row["tag_name"])
        return list(tasks.values())
