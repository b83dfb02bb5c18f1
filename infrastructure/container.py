from peewee import Database

from core.application.task_service import TaskService
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings, load_settings
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
from infrastructure.peewee.session.db import create_database


def get_task_repository(database: Database) -> TaskRepository:
    return PeeweeTaskRepository(database)


def get_task_service(database: Database) -> TaskService:
    return TaskService(repository=get_task_repository(database))


def build_task_service(settings: Settings | None = None) -> tuple[TaskService, Database]:
    """
    Wire settings -> database -> repository -> service.

    Returns the database too so the owner can close it on shutdown.
    """
    settings = settings or load_settings()
    database = create_database(settings)
    return get_task_service(database), database
