from fastapi import Request

from core.application.task_service import TaskService


def task_service(request: Request) -> TaskService:
    return request.app.state.task_service
