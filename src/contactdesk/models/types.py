"""Pydantic response models for the ContactDesk API.

Response payloads are built from domain entities (from_attributes) and
serialized with camelCase keys. Every endpoint wraps its payload in
ApiResponse.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from contactdesk.models.domain import Priority, TaskStatus

T = TypeVar("T")


def _iso_utc(value: datetime) -> str:
    """Render as ISO-8601 UTC with milliseconds, e.g. 2024-03-01T08:00:00.000Z.

    Naive values are stored in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


UtcTimestamp = Annotated[
    datetime, PlainSerializer(_iso_utc, return_type=str, when_used="json")
]


class ApiModel(BaseModel):
    """Base for response payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Envelope
# ============================================================================


class FieldError(ApiModel):
    """A single validation failure."""

    field: str
    message: str


class ApiResponse(ApiModel, Generic[T]):
    """Uniform success envelope."""

    success: bool
    data: T | None = None
    message: str = ""
    timestamp: str


class ErrorResponse(ApiModel):
    """Uniform error envelope."""

    success: bool = False
    data: None = None
    message: str
    timestamp: str
    errors: list[FieldError] | None = None
    stack: str | None = None


# ============================================================================
# Contacts
# ============================================================================


class ContactDetail(ApiModel):
    """Contact as returned by the contact endpoints."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None
    company: str | None
    notes: str | None
    created_at: UtcTimestamp | None
    updated_at: UtcTimestamp | None


class ContactSummary(ApiModel):
    """Contact embedded in tasks and memberships."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    company: str | None = None


# ============================================================================
# Tasks
# ============================================================================


class ProjectBrief(ApiModel):
    """Project embedded in tasks and memberships."""

    id: int
    name: str
    status: str
    description: str | None = None


class TaskSummary(ApiModel):
    """Task embedded in project list items."""

    id: int
    title: str
    status: TaskStatus
    priority: Priority


class TaskDetail(TaskSummary):
    """Task with its assignee and project."""

    description: str | None
    due_date: UtcTimestamp | None
    assignee_id: int | None
    project_id: int | None
    created_at: UtcTimestamp | None
    updated_at: UtcTimestamp | None
    assignee: ContactSummary | None
    project: ProjectBrief | None


# ============================================================================
# Projects
# ============================================================================


class MemberDetail(ApiModel):
    """Project membership with the member's contact details."""

    id: int
    role: str
    joined_at: UtcTimestamp
    contact_id: int
    project_id: int
    contact: ContactSummary
    project: ProjectBrief | None = None


class ProjectCountsDetail(ApiModel):
    tasks: int
    members: int


class ProjectSummary(ApiModel):
    """Project as listed by GET /project/list."""

    id: int
    name: str
    description: str | None
    status: str
    start_date: UtcTimestamp
    end_date: UtcTimestamp | None
    created_at: UtcTimestamp | None
    updated_at: UtcTimestamp | None
    members: list[MemberDetail]
    tasks: list[TaskSummary]
    count: ProjectCountsDetail = Field(alias="_count")


class ProjectDetail(ProjectSummary):
    """Project with fully detailed tasks, ordered by urgency."""

    tasks: list[TaskDetail]


class ProjectStatsDetail(ApiModel):
    """Aggregate counts for one project."""

    total_tasks: int
    total_members: int
    tasks_by_status: dict[str, int]
