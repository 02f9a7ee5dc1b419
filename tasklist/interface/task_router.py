"""Tasks router: owner-scoped CRUD over /tasks."""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from tasklist.core.errors import NotFoundError
from tasklist.domain.task import Task, TaskCreate, TaskUpdate
from tasklist.interface.auth import get_current_user_id
from tasklist.interface.dependencies import get_task_service
from tasklist.interface.validation import validate_request
from tasklist.services.task_service import TaskService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _task_json(task: Task) -> dict:
    return task.model_dump(mode="json", by_alias=True)


def _operation_failed(error: str, exc: Exception, **context: object) -> JSONResponse:
    """Turn an unexpected business-layer failure into a 500 carrying the raw message."""
    logger.error(error, extra={"error": str(exc), "error_type": type(exc).__name__, **context})
    return JSONResponse(
        content={"error": error, "message": str(exc)},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.get("", response_model=list[Task])
async def get_all_tasks(
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    """List the caller's active tasks, newest first."""
    try:
        tasks = await task_service.get_all_tasks(user_id)
    except Exception as e:
        return _operation_failed("Failed to fetch tasks", e, user_id=user_id)

    return JSONResponse(content=[_task_json(task) for task in tasks])


@router.get("/{task_id}", response_model=Task)
async def get_task_by_id(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    """Get one of the caller's active tasks."""
    try:
        task = await task_service.get_task_by_id(task_id, user_id)
    except Exception as e:
        return _operation_failed("Failed to fetch task", e, user_id=user_id, task_id=task_id)

    if task is None:
        raise NotFoundError
    return JSONResponse(content=_task_json(task))


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    user_id: str = Depends(get_current_user_id),
    data: TaskCreate = Depends(validate_request(TaskCreate)),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    """Create a pending task for the caller."""
    try:
        task = await task_service.create_task(user_id, data)
    except Exception as e:
        return _operation_failed("Failed to create task", e, user_id=user_id)

    return JSONResponse(content=_task_json(task), status_code=status.HTTP_201_CREATED)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    data: TaskUpdate = Depends(validate_request(TaskUpdate)),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    """Partially update one of the caller's active tasks."""
    try:
        task = await task_service.update_task(task_id, user_id, data)
    except Exception as e:
        return _operation_failed("Failed to update task", e, user_id=user_id, task_id=task_id)

    if task is None:
        raise NotFoundError
    return JSONResponse(content=_task_json(task))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    """Soft-delete one of the caller's active tasks."""
    try:
        deleted = await task_service.delete_task(task_id, user_id)
    except Exception as e:
        return _operation_failed("Failed to delete task", e, user_id=user_id, task_id=task_id)

    if not deleted:
        raise NotFoundError
    return Response(status_code=status.HTTP_204_NO_CONTENT)
