"""Database schema for ContactDesk.

Four tables: contacts, projects, tasks and the project membership join
table. Deletion rules live on the foreign keys so they hold even for
bulk deletes.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    # Stored naive, in UTC; SQLite drops tzinfo on read
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Contact(Base):
    """A person in the address book.

    Invariant: UNIQUE(email)
    """

    __tablename__ = "Contact"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column("firstName", String(255), nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    tasks: Mapped[list["Task"]] = relationship(back_populates="assignee", passive_deletes=True)
    memberships: Mapped[list["ProjectMember"]] = relationship(
        back_populates="contact", cascade="all, delete-orphan", passive_deletes=True
    )


class Project(Base):
    """A project contacts work on."""

    __tablename__ = "Project"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    start_date: Mapped[datetime] = mapped_column(
        "startDate", DateTime, nullable=False, default=_utcnow
    )
    end_date: Mapped[datetime | None] = mapped_column("endDate", DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    tasks: Mapped[list["Task"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )
    members: Mapped[list["ProjectMember"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )


class Task(Base):
    """A unit of work, optionally assigned and attached to a project.

    assignee_id: ON DELETE SET NULL
    project_id: ON DELETE CASCADE
    """

    __tablename__ = "Task"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="TODO")
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="MEDIUM")
    due_date: Mapped[datetime | None] = mapped_column("dueDate", DateTime, nullable=True)
    assignee_id: Mapped[int | None] = mapped_column(
        "assigneeId", Integer, ForeignKey("Contact.id", ondelete="SET NULL"), nullable=True
    )
    project_id: Mapped[int | None] = mapped_column(
        "projectId", Integer, ForeignKey("Project.id", ondelete="CASCADE"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )

    assignee: Mapped[Contact | None] = relationship(back_populates="tasks")
    project: Mapped[Project | None] = relationship(back_populates="tasks")


class ProjectMember(Base):
    """Membership of a contact in a project.

    Invariant: UNIQUE(contact_id, project_id)
    A contact joins a given project at most once.
    """

    __tablename__ = "ProjectMember"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role: Mapped[str] = mapped_column(String(64), nullable=False, default="member")
    joined_at: Mapped[datetime] = mapped_column(
        "joinedAt", DateTime, nullable=False, default=_utcnow
    )
    contact_id: Mapped[int] = mapped_column(
        "contactId", Integer, ForeignKey("Contact.id", ondelete="CASCADE"), nullable=False
    )
    project_id: Mapped[int] = mapped_column(
        "projectId", Integer, ForeignKey("Project.id", ondelete="CASCADE"), nullable=False
    )

    contact: Mapped[Contact] = relationship(back_populates="memberships")
    project: Mapped[Project] = relationship(back_populates="members")

    __table_args__ = (
        UniqueConstraint("contactId", "projectId", name="uq_project_member"),
    )
