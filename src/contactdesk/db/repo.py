"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping the service layer free of
query construction. Returns domain models (not SQLAlchemy entities) to
external callers. Writes are flushed but never committed here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session, selectinload

from contactdesk.db.schema import Contact, Project, ProjectMember, Task
from contactdesk.models.domain import (
    ContactEntity,
    ContactRef,
    MemberEntity,
    ProjectCounts,
    ProjectEntity,
    ProjectRef,
    ProjectStats,
    TaskEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

# URGENT first when sorted descending
PRIORITY_RANK = case(
    {"LOW": 1, "MEDIUM": 2, "HIGH": 3, "URGENT": 4},
    value=Task.priority,
    else_=0,
)

TASK_ORDER = (
    PRIORITY_RANK.desc(),
    Task.due_date.is_(None),
    Task.due_date.asc(),
    Task.created_at.desc(),
    Task.id.desc(),
)


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _contact_to_entity(contact: Contact) -> ContactEntity:
    """Convert SQLAlchemy Contact to domain entity."""
    return ContactEntity(
        id=contact.id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        email=contact.email,
        phone=contact.phone,
        company=contact.company,
        notes=contact.notes,
        created_at=contact.created_at,
        updated_at=contact.updated_at,
    )


def _contact_to_ref(contact: Contact) -> ContactRef:
    return ContactRef(
        id=contact.id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        email=contact.email,
        phone=contact.phone,
        company=contact.company,
    )


def _project_to_ref(project: Project) -> ProjectRef:
    return ProjectRef(
        id=project.id,
        name=project.name,
        status=project.status,
        description=project.description,
    )


def _task_to_entity(task: Task) -> TaskEntity:
    """Convert SQLAlchemy Task (with relations) to domain entity."""
    return TaskEntity(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        due_date=task.due_date,
        assignee_id=task.assignee_id,
        project_id=task.project_id,
        created_at=task.created_at,
        updated_at=task.updated_at,
        assignee=_contact_to_ref(task.assignee) if task.assignee else None,
        project=_project_to_ref(task.project) if task.project else None,
    )


def _member_to_entity(member: ProjectMember) -> MemberEntity:
    """Convert SQLAlchemy ProjectMember to domain entity."""
    return MemberEntity(
        id=member.id,
        role=member.role,
        joined_at=member.joined_at,
        contact_id=member.contact_id,
        project_id=member.project_id,
        contact=_contact_to_ref(member.contact),
        project=_project_to_ref(member.project),
    )


def _project_to_entity(project: Project, tasks: list[Task] | None = None) -> ProjectEntity:
    """Convert SQLAlchemy Project to domain entity.

    Args:
        project: Project row with members and tasks loaded.
        tasks: Optional pre-ordered task rows; defaults to project.tasks.
    """
    if tasks is None:
        tasks = list(project.tasks)

    members = sorted(project.members, key=lambda m: (m.joined_at, m.id))

    return ProjectEntity(
        id=project.id,
        name=project.name,
        description=project.description,
        status=project.status,
        start_date=project.start_date,
        end_date=project.end_date,
        created_at=project.created_at,
        updated_at=project.updated_at,
        members=[_member_to_entity(m) for m in members],
        tasks=[_task_to_entity(t) for t in tasks],
        count=ProjectCounts(tasks=len(tasks), members=len(members)),
    )


def _apply(row: Any, data: dict[str, Any]) -> None:
    for key, value in data.items():
        setattr(row, key, value)


# ============================================================================
# Contact Repository
# ============================================================================


def list_contacts(session: DbSession) -> list[ContactEntity]:
    """Get all contacts, newest first."""
    stmt = select(Contact).order_by(Contact.created_at.desc(), Contact.id.desc())
    return [_contact_to_entity(c) for c in session.scalars(stmt)]


def get_contact(session: DbSession, contact_id: int) -> ContactEntity | None:
    """Get contact by ID."""
    contact = session.get(Contact, contact_id)
    return _contact_to_entity(contact) if contact else None


def create_contact(session: DbSession, data: dict[str, Any]) -> ContactEntity:
    """Insert a contact and flush so constraint errors surface here."""
    contact = Contact(**data)
    session.add(contact)
    session.flush()
    return _contact_to_entity(contact)


def update_contact(
    session: DbSession, contact_id: int, data: dict[str, Any]
) -> ContactEntity | None:
    """Apply a partial update. Returns None if the contact doesn't exist."""
    contact = session.get(Contact, contact_id)
    if contact is None:
        return None
    _apply(contact, data)
    session.flush()
    return _contact_to_entity(contact)


def delete_contact(session: DbSession, contact_id: int) -> bool:
    """Delete a contact. Memberships cascade, assigned tasks are unassigned."""
    contact = session.get(Contact, contact_id)
    if contact is None:
        return False
    session.delete(contact)
    session.flush()
    return True


# ============================================================================
# Task Repository
# ============================================================================


def _task_query():
    return select(Task).options(selectinload(Task.assignee), selectinload(Task.project))


def list_tasks(
    session: DbSession,
    status: str | None = None,
    priority: str | None = None,
    assignee_id: int | None = None,
    project_id: int | None = None,
) -> list[TaskEntity]:
    """Get tasks matching the given filters, most pressing first."""
    stmt = _task_query()

    if status is not None:
        stmt = stmt.where(Task.status == status)
    if priority is not None:
        stmt = stmt.where(Task.priority == priority)
    if assignee_id is not None:
        stmt = stmt.where(Task.assignee_id == assignee_id)
    if project_id is not None:
        stmt = stmt.where(Task.project_id == project_id)

    stmt = stmt.order_by(*TASK_ORDER)
    return [_task_to_entity(t) for t in session.scalars(stmt)]


def get_task(session: DbSession, task_id: int) -> TaskEntity | None:
    """Get task by ID with assignee and project."""
    task = session.scalars(_task_query().where(Task.id == task_id)).first()
    return _task_to_entity(task) if task else None


def create_task(session: DbSession, data: dict[str, Any]) -> TaskEntity:
    """Insert a task and flush so FK errors surface here."""
    task = Task(**data)
    session.add(task)
    session.flush()
    return _task_to_entity(task)


def update_task(session: DbSession, task_id: int, data: dict[str, Any]) -> TaskEntity | None:
    """Apply a partial update. Returns None if the task doesn't exist."""
    task = session.get(Task, task_id)
    if task is None:
        return None
    _apply(task, data)
    session.flush()
    # Reload relations in case the foreign keys changed
    session.expire(task, ["assignee", "project"])
    return _task_to_entity(task)


def delete_task(session: DbSession, task_id: int) -> bool:
    """Delete a task."""
    task = session.get(Task, task_id)
    if task is None:
        return False
    session.delete(task)
    session.flush()
    return True


# ============================================================================
# Project Repository
# ============================================================================


def _project_query():
    return select(Project).options(
        selectinload(Project.members).selectinload(ProjectMember.contact),
        selectinload(Project.tasks),
    )


def list_projects(session: DbSession, status: str | None = None) -> list[ProjectEntity]:
    """Get projects, newest first, optionally filtered by status."""
    stmt = _project_query()
    if status is not None:
        stmt = stmt.where(Project.status == status)
    stmt = stmt.order_by(Project.created_at.desc(), Project.id.desc())
    return [_project_to_entity(p) for p in session.scalars(stmt)]


def get_project(session: DbSession, project_id: int) -> ProjectEntity | None:
    """Get project by ID with members and ordered, fully detailed tasks."""
    project = session.scalars(_project_query().where(Project.id == project_id)).first()
    if project is None:
        return None

    tasks = session.scalars(
        _task_query().where(Task.project_id == project_id).order_by(*TASK_ORDER)
    ).all()
    return _project_to_entity(project, list(tasks))


def create_project(session: DbSession, data: dict[str, Any]) -> ProjectEntity:
    """Insert a project."""
    project = Project(**data)
    session.add(project)
    session.flush()
    return _project_to_entity(project)


def update_project(
    session: DbSession, project_id: int, data: dict[str, Any]
) -> ProjectEntity | None:
    """Apply a partial update. Returns None if the project doesn't exist."""
    project = session.get(Project, project_id)
    if project is None:
        return None
    _apply(project, data)
    session.flush()
    return _project_to_entity(project)


def delete_project(session: DbSession, project_id: int) -> bool:
    """Delete a project. Tasks and memberships cascade."""
    project = session.get(Project, project_id)
    if project is None:
        return False
    session.delete(project)
    session.flush()
    return True


def get_project_stats(session: DbSession, project_id: int) -> ProjectStats | None:
    """Count tasks per status and members for a project."""
    if session.get(Project, project_id) is None:
        return None

    rows = session.execute(
        select(Task.status, func.count(Task.id))
        .where(Task.project_id == project_id)
        .group_by(Task.status)
    ).all()
    tasks_by_status = {status: count for status, count in rows}

    total_members = session.scalar(
        select(func.count(ProjectMember.id)).where(ProjectMember.project_id == project_id)
    )

    return ProjectStats(
        total_tasks=sum(tasks_by_status.values()),
        total_members=total_members or 0,
        tasks_by_status=tasks_by_status,
    )


# ============================================================================
# Membership Repository
# ============================================================================


def add_member(session: DbSession, project_id: int, contact_id: int, role: str) -> MemberEntity:
    """Insert a membership and flush so constraint errors surface here."""
    member = ProjectMember(project_id=project_id, contact_id=contact_id, role=role)
    session.add(member)
    session.flush()
    return _member_to_entity(member)


def list_members(session: DbSession, project_id: int) -> list[MemberEntity]:
    """Get members of a project in join order."""
    stmt = (
        select(ProjectMember)
        .options(selectinload(ProjectMember.contact), selectinload(ProjectMember.project))
        .where(ProjectMember.project_id == project_id)
        .order_by(ProjectMember.joined_at.asc(), ProjectMember.id.asc())
    )
    return [_member_to_entity(m) for m in session.scalars(stmt)]


def remove_member(session: DbSession, project_id: int, contact_id: int) -> bool:
    """Delete a membership. Returns False if there was none."""
    member = session.scalars(
        select(ProjectMember).where(
            ProjectMember.project_id == project_id,
            ProjectMember.contact_id == contact_id,
        )
    ).first()
    if member is None:
        return False
    session.delete(member)
    session.flush()
    return True


# ============================================================================
# Transaction helpers
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit pending changes."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Discard pending changes."""
    session.rollback()
