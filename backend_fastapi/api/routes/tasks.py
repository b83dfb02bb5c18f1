from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from backend_fastapi.api.deps import task_service
from backend_fastapi.api.schemas import TaskPayload
from core.application.task_service import TaskService
from core.domain.errors import PersistenceError, ValidationError
from core.domain.models.task import Task, TaskStatus

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _unprocessable(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


def _unavailable(exc: PersistenceError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
def create_task(
    payload: TaskPayload,
    service: TaskService = Depends(task_service),
) -> Task:
    """
    Create a task with its tags.

    - **tags**: list of names, or a comma separated string.
    - **status**: defaults to PENDING.
    """
    try:
        return service.create(payload.to_task())
    except ValidationError as e:
        raise _unprocessable(e)
    except PersistenceError as e:
        raise _unavailable(e)


@router.get(
    "",
    response_model=list[Task],
    summary="List tasks",
)
def list_tasks(
    status_filter: TaskStatus | None = Query(None, alias="status"),
    order: Literal["asc", "desc"] | None = None,
    service: TaskService = Depends(task_service),
) -> list[Task]:
    """
    List tasks, optionally filtered by `status` or sorted by due date
    with `order`.
    """
    try:
        if status_filter is not None:
            return service.list_by_status(status_filter)
        if order is not None:
            return service.list_sorted_by_due_date(ascending=order == "asc")
        return service.list()
    except PersistenceError as e:
        raise _unavailable(e)


@router.get("/{task_id}", response_model=Task, summary="Get a task")
def get_task(
    task_id: int,
    service: TaskService = Depends(task_service),
) -> Task:
    try:
        task = service.get(task_id)
    except PersistenceError as e:
        raise _unavailable(e)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.put("/{task_id}", response_model=Task, summary="Update a task")
def update_task(
    task_id: int,
    payload: TaskPayload,
    service: TaskService = Depends(task_service),
) -> Task:
    """Overwrite a task. Its tags are replaced by the ones sent."""
    try:
        return service.update(payload.to_task(task_id))
    except ValidationError as e:
        raise _unprocessable(e)
    except PersistenceError as e:
        raise _unavailable(e)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
def delete_task(
    task_id: int,
    service: TaskService = Depends(task_service),
) -> Response:
    try:
        service.delete(task_id)
    except PersistenceError as e:
        raise _unavailable(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
