"""Project and membership operations."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from contactdesk.core.errors import ConflictError, InvalidReferenceError
from contactdesk.db import repo
from contactdesk.db.errors import classify_integrity_error
from contactdesk.db.repo import DbSession
from contactdesk.models.domain import MemberEntity, ProjectEntity, ProjectStats

logger = logging.getLogger(__name__)


def find_all(session: DbSession, status: str | None = None) -> list[ProjectEntity]:
    return repo.list_projects(session, status=status)


def find_by_id(session: DbSession, project_id: int) -> ProjectEntity | None:
    return repo.get_project(session, project_id)


def create(session: DbSession, data: dict[str, Any]) -> ProjectEntity:
    project = repo.create_project(session, data)
    repo.commit(session)
    logger.info("Created project %s", project.id)
    return project


def update(session: DbSession, project_id: int, data: dict[str, Any]) -> ProjectEntity | None:
    project = repo.update_project(session, project_id, data)
    repo.commit(session)
    return project


def remove(session: DbSession, project_id: int) -> bool:
    """Delete a project together with its tasks and memberships."""
    deleted = repo.delete_project(session, project_id)
    repo.commit(session)
    if deleted:
        logger.info("Deleted project %s", project_id)
    return deleted


def add_member(
    session: DbSession, project_id: int, contact_id: int, role: str = "member"
) -> MemberEntity:
    """Add a contact to a project.

    Args:
        session: Database session.
        project_id: Project to join.
        contact_id: Contact joining the project.
        role: Free-form role label.

    Returns:
        The new membership with contact and project summaries.

    Raises:
        ConflictError: If the contact is already a member.
        InvalidReferenceError: If the project or contact does not exist.
    """
    try:
        member = repo.add_member(session, project_id, contact_id, role)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        kind = classify_integrity_error(e)
        if kind == "unique":
            raise ConflictError(
                f"Contact {contact_id} is already a member of project {project_id}"
            ) from e
        if kind == "foreign_key":
            raise InvalidReferenceError("Project or contact not found") from e
        raise

    return member


def get_members(session: DbSession, project_id: int) -> list[MemberEntity]:
    return repo.list_members(session, project_id)


def remove_member(session: DbSession, project_id: int, contact_id: int) -> bool:
    removed = repo.remove_member(session, project_id, contact_id)
    repo.commit(session)
    return removed


def get_stats(session: DbSession, project_id: int) -> ProjectStats | None:
    return repo.get_project_stats(session, project_id)
