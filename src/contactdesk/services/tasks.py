"""Task operations."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from contactdesk.core.errors import InvalidReferenceError
from contactdesk.db import repo
from contactdesk.db.errors import classify_integrity_error
from contactdesk.db.repo import DbSession
from contactdesk.models.domain import TaskEntity, TaskStatus

logger = logging.getLogger(__name__)


def find_all(
    session: DbSession,
    status: str | None = None,
    priority: str | None = None,
    assignee_id: int | None = None,
    project_id: int | None = None,
) -> list[TaskEntity]:
    return repo.list_tasks(
        session,
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        project_id=project_id,
    )


def find_by_id(session: DbSession, task_id: int) -> TaskEntity | None:
    return repo.get_task(session, task_id)


def _write(session: DbSession, operation, *args) -> Any:
    """Run a repository write and commit, mapping FK failures."""
    try:
        result = operation(session, *args)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        if classify_integrity_error(e) == "foreign_key":
            raise InvalidReferenceError("Assigned contact or project does not exist") from e
        raise
    return result


def create(session: DbSession, data: dict[str, Any]) -> TaskEntity:
    """Create a task.

    Raises:
        InvalidReferenceError: If assignee_id or project_id is unknown.
    """
    task = _write(session, repo.create_task, data)
    logger.info("Created task %s", task.id)
    return task


def update(session: DbSession, task_id: int, data: dict[str, Any]) -> TaskEntity | None:
    """Apply a partial update to a task.

    Returns:
        Updated task, or None if it doesn't exist.

    Raises:
        InvalidReferenceError: If a new assignee_id or project_id is unknown.
    """
    return _write(session, repo.update_task, task_id, data)


def update_status(session: DbSession, task_id: int, status: TaskStatus) -> TaskEntity | None:
    """Move a task to another workflow status."""
    return _write(session, repo.update_task, task_id, {"status": status})


def remove(session: DbSession, task_id: int) -> bool:
    deleted = repo.delete_task(session, task_id)
    repo.commit(session)
    return deleted
