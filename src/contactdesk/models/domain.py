"""Domain models for ContactDesk.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

TaskStatus = Literal["TODO", "IN_PROGRESS", "REVIEW", "DONE"]
Priority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]


# ============================================================================
# Contact Domain
# ============================================================================


@dataclass
class ContactEntity:
    """Domain model for a contact."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    company: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ContactRef:
    """Contact summary embedded in tasks and memberships."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    company: str | None = None


# ============================================================================
# Task Domain
# ============================================================================


@dataclass
class ProjectRef:
    """Project summary embedded in tasks and memberships."""

    id: int
    name: str
    status: str
    description: str | None = None


@dataclass
class TaskEntity:
    """Domain model for a task with its related contact and project."""

    id: int
    title: str
    status: TaskStatus
    priority: Priority
    description: str | None = None
    due_date: datetime | None = None
    assignee_id: int | None = None
    project_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    assignee: ContactRef | None = None
    project: ProjectRef | None = None


# ============================================================================
# Project Domain
# ============================================================================


@dataclass
class MemberEntity:
    """Domain model for a project membership."""

    id: int
    role: str
    joined_at: datetime
    contact_id: int
    project_id: int
    contact: ContactRef
    project: ProjectRef | None = None


@dataclass
class ProjectCounts:
    """Aggregated relation counts for a project."""

    tasks: int
    members: int


@dataclass
class ProjectEntity:
    """Domain model for a project with members and tasks."""

    id: int
    name: str
    status: str
    start_date: datetime
    description: str | None = None
    end_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    members: list[MemberEntity] = field(default_factory=list)
    tasks: list[TaskEntity] = field(default_factory=list)
    count: ProjectCounts = field(default_factory=lambda: ProjectCounts(tasks=0, members=0))


@dataclass
class ProjectStats:
    """Task and member statistics for a project."""

    total_tasks: int
    total_members: int
    tasks_by_status: dict[str, int]
