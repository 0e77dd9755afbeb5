"""Request bodies (DTOs) for the ContactDesk API.

Fields are snake_case in Python and camelCase on the wire. Unknown
fields in a request body are ignored, strings are trimmed before their
length rules are checked.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

from contactdesk.models.domain import Priority, TaskStatus


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _to_naive_utc(value: datetime) -> datetime:
    """Normalize to naive UTC, the form datetimes are stored in."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Largest id a JavaScript client can represent exactly
MAX_ID = 2**53 - 1


PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Description = Annotated[str, StringConstraints(max_length=1000)]
Email = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(str.lower)]
PositiveId = Annotated[int, Field(gt=0, le=MAX_ID, strict=True)]
UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Field cannot be null")
    return value


class RequestModel(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """Column values to write, keyed by ORM attribute name."""
        return self.model_dump()


class PartialRequestModel(RequestModel):
    """Base for partial updates: only fields sent by the client are written."""

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# ============================================================================
# Contacts
# ============================================================================


class ContactCreate(RequestModel):
    """Body of POST /contact."""

    first_name: PersonName
    last_name: PersonName
    email: Email
    phone: str | None = None
    company: str | None = None
    notes: str | None = None


class ContactUpdate(PartialRequestModel):
    """Body of PUT /contact/{id}."""

    first_name: PersonName | None = None
    last_name: PersonName | None = None
    email: Email | None = None
    phone: str | None = None
    company: str | None = None
    notes: str | None = None

    @field_validator("first_name", "last_name", "email", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


# ============================================================================
# Projects
# ============================================================================


class ProjectCreate(RequestModel):
    """Body of POST /project."""

    name: Title
    description: Description | None = None
    status: str = "active"
    start_date: UtcDateTime | None = None
    end_date: UtcDateTime | None = None

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump()
        # Let the column default fill in today
        if record["start_date"] is None:
            del record["start_date"]
        return record


class ProjectUpdate(PartialRequestModel):
    """Body of PUT /project/{id}."""

    name: Title | None = None
    description: Description | None = None
    status: str | None = None
    start_date: UtcDateTime | None = None
    end_date: UtcDateTime | None = None

    @field_validator("name", "status", "start_date", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class MemberAdd(RequestModel):
    """Body of POST /project/{id}/members."""

    contact_id: PositiveId
    role: str = "member"


# ============================================================================
# Tasks
# ============================================================================


class TaskCreate(RequestModel):
    """Body of POST /task."""

    title: Title
    description: Description | None = None
    status: TaskStatus = "TODO"
    priority: Priority = "MEDIUM"
    due_date: UtcDateTime | None = None
    assignee_id: PositiveId | None = None
    project_id: PositiveId | None = None


class TaskUpdate(PartialRequestModel):
    """Body of PUT /task/{id}. Same fields as TaskCreate, none required."""

    title: Title | None = None
    description: Description | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    due_date: UtcDateTime | None = None
    assignee_id: PositiveId | None = None
    project_id: PositiveId | None = None

    @field_validator("title", "status", "priority", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class TaskStatusUpdate(RequestModel):
    """Body of PATCH /task/{id}/status."""

    status: TaskStatus
