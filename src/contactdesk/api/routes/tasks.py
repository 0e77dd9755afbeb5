"""Tasks API endpoint.

GET    /api/v1/task/list        - List tasks (filters: status, priority, assigneeId, projectId)
GET    /api/v1/task/{id}        - Get task
POST   /api/v1/task             - Create task
PUT    /api/v1/task/{id}        - Update task
PATCH  /api/v1/task/{id}/status - Change task status
DELETE /api/v1/task/{id}        - Delete task
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from contactdesk.api.app import get_db_session
from contactdesk.api.response import success_response
from contactdesk.core.errors import InvalidReferenceError
from contactdesk.db.repo import DbSession
from contactdesk.models.domain import Priority, TaskStatus
from contactdesk.models.dto import MAX_ID, TaskCreate, TaskStatusUpdate, TaskUpdate
from contactdesk.models.types import ApiResponse, TaskDetail
from contactdesk.services import tasks as task_service

router = APIRouter()

TaskId = Annotated[int, Path(gt=0, le=MAX_ID, description="Task ID")]

UNKNOWN_REFERENCE = "The assigned contact or project does not exist"


@router.get("/list", response_model=ApiResponse[list[TaskDetail]])
def list_tasks(
    status: TaskStatus | None = None,
    priority: Priority | None = None,
    assignee_id: Annotated[int | None, Query(alias="assigneeId", gt=0, le=MAX_ID)] = None,
    project_id: Annotated[int | None, Query(alias="projectId", gt=0, le=MAX_ID)] = None,
    session: DbSession = Depends(get_db_session),
):
    """List tasks, most urgent first, optionally filtered."""
    tasks = task_service.find_all(
        session,
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        project_id=project_id,
    )
    return success_response([TaskDetail.model_validate(t) for t in tasks], "Tasks retrieved")


@router.get("/{id}", response_model=ApiResponse[TaskDetail])
def get_task(id: TaskId, session: DbSession = Depends(get_db_session)):
    """Get a task with its assignee and project.

    Raises:
        HTTPException: 404 if task not found.
    """
    task = task_service.find_by_id(session, id)

    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    return success_response(TaskDetail.model_validate(task))


@router.post("", response_model=ApiResponse[TaskDetail], status_code=201)
@router.post("/", response_model=ApiResponse[TaskDetail], status_code=201, include_in_schema=False)
def create_task(payload: TaskCreate, session: DbSession = Depends(get_db_session)):
    """Create a task.

    Raises:
        HTTPException: 400 if the assignee or project does not exist.
    """
    try:
        task = task_service.create(session, payload.to_record())
    except InvalidReferenceError as e:
        raise HTTPException(status_code=400, detail=UNKNOWN_REFERENCE) from e

    return success_response(TaskDetail.model_validate(task), "Task created")


@router.put("/{id}", response_model=ApiResponse[TaskDetail])
def update_task(
    id: TaskId,
    payload: TaskUpdate,
    session: DbSession = Depends(get_db_session),
):
    """Update some or all fields of a task.

    Raises:
        HTTPException: 404 if task not found, 400 if a new assignee or project does not exist.
    """
    try:
        task = task_service.update(session, id, payload.to_record())
    except InvalidReferenceError as e:
        raise HTTPException(status_code=400, detail=UNKNOWN_REFERENCE) from e

    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    return success_response(TaskDetail.model_validate(task), "Task updated")


@router.patch("/{id}/status", response_model=ApiResponse[TaskDetail])
def update_task_status(
    id: TaskId,
    payload: TaskStatusUpdate,
    session: DbSession = Depends(get_db_session),
):
    """Move a task through the workflow (TODO -> IN_PROGRESS -> REVIEW -> DONE).

    Raises:
        HTTPException: 404 if task not found.
    """
    task = task_service.update_status(session, id, payload.status)

    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")

    return success_response(TaskDetail.model_validate(task), "Status updated")


@router.delete("/{id}", response_model=ApiResponse[None])
def delete_task(id: TaskId, session: DbSession = Depends(get_db_session)):
    """Delete a task.

    Raises:
        HTTPException: 404 if task not found.
    """
    if not task_service.remove(session, id):
        raise HTTPException(status_code=404, detail="Task not found")

    return success_response(None, "Task deleted")
