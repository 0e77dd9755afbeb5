"""Demo data for local development.

Wipes the four tables and loads a small, realistic data set:
4 contacts, 3 projects, 7 memberships and 7 tasks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from contactdesk.db.schema import Contact, Project, ProjectMember, Task

logger = logging.getLogger(__name__)

DEMO_CONTACTS = [
    {
        "first_name": "Jean",
        "last_name": "Dupont",
        "email": "jean.dupont@example.com",
        "phone": "06 01 02 03 04",
        "company": "Tech Corp",
        "notes": "Lead developer, 10 years of React experience.",
    },
    {
        "first_name": "Marie",
        "last_name": "Martin",
        "email": "marie.martin@example.com",
        "phone": "06 99 88 77 66",
        "company": "Design Studio",
        "notes": "UI/UX expert focused on mobile interfaces.",
    },
    {
        "first_name": "Pierre",
        "last_name": "Durand",
        "email": "pierre.durand@example.com",
        "phone": "06 12 34 56 78",
        "company": "Marketing Inc",
        "notes": "Certified Scrum Master and project lead.",
    },
    {
        "first_name": "Sophie",
        "last_name": "Dubois",
        "email": "sophie.dubois@example.com",
        "phone": "06 11 22 33 44",
        "company": "Data Analytics Co",
        "notes": "Data scientist, machine learning and Python.",
    },
]

DEMO_PROJECTS = [
    {
        "name": "E-commerce Platform",
        "description": "Full rebuild of the online store.",
        "status": "active",
        "start_date": datetime(2024, 1, 15),
        "end_date": datetime(2024, 6, 30),
    },
    {
        "name": "Mobile App",
        "description": "Native task management app for iOS and Android.",
        "status": "active",
        "start_date": datetime(2024, 2, 1),
        "end_date": datetime(2024, 8, 15),
    },
    {
        "name": "Analytics Dashboard",
        "description": "Real-time BI dashboard for management.",
        "status": "planning",
        "start_date": datetime(2024, 3, 1),
        "end_date": datetime(2024, 9, 30),
    },
]

# (contact index, project index, role)
DEMO_MEMBERSHIPS = [
    (0, 0, "lead_dev"),
    (1, 0, "designer"),
    (2, 0, "project_manager"),
    (0, 1, "developer"),
    (1, 1, "lead_designer"),
    (3, 2, "data_scientist"),
    (2, 2, "project_manager"),
]

# (title, description, status, priority, contact index, project index, due date)
DEMO_TASKS = [
    ("Initialise the Git repository", "Set up the project with linting and formatting.",
     "DONE", "HIGH", 0, 0, datetime(2024, 1, 20)),
    ("Login page mockups", "Wireframes for the authentication flow.",
     "IN_PROGRESS", "HIGH", 1, 0, datetime(2024, 2, 15)),
    ("Build the product catalogue", "Product list with filters and search.",
     "TODO", "MEDIUM", 0, 0, datetime(2024, 3, 1)),
    ("Main navigation", "Tab bar and mobile routing.",
     "REVIEW", "HIGH", 1, 1, datetime(2024, 2, 20)),
    ("Task creation form", "Input screens with validation.",
     "TODO", "MEDIUM", 0, 1, datetime(2024, 3, 10)),
    ("Charting library benchmark", "Compare charting libraries for the dashboard.",
     "IN_PROGRESS", "MEDIUM", 3, 2, datetime(2024, 3, 15)),
    ("ETL pipeline", "Ingest data from the production API.",
     "TODO", "HIGH", 3, 2, datetime(2024, 4, 1)),
]


@dataclass
class SeedSummary:
    """Number of rows created per table."""

    contacts: int
    projects: int
    members: int
    tasks: int


def clear_database(session: Session) -> None:
    """Delete all rows, children before parents."""
    for table in (Task, ProjectMember, Project, Contact):
        session.execute(delete(table))


def seed_database(session: Session) -> SeedSummary:
    """Replace the database contents with the demo data set.

    Args:
        session: Database session. Committed on success.

    Returns:
        SeedSummary with row counts.
    """
    clear_database(session)

    contacts = [Contact(**data) for data in DEMO_CONTACTS]
    projects = [Project(**data) for data in DEMO_PROJECTS]
    session.add_all(contacts + projects)
    session.flush()

    members = [
        ProjectMember(contact_id=contacts[c].id, project_id=projects[p].id, role=role)
        for c, p, role in DEMO_MEMBERSHIPS
    ]
    tasks = [
        Task(
            title=title,
            description=description,
            status=status,
            priority=priority,
            assignee_id=contacts[c].id,
            project_id=projects[p].id,
            due_date=due_date,
        )
        for title, description, status, priority, c, p, due_date in DEMO_TASKS
    ]
    session.add_all(members + tasks)
    session.commit()

    summary = SeedSummary(
        contacts=len(contacts),
        projects=len(projects),
        members=len(members),
        tasks=len(tasks),
    )
    logger.info("Seeded database: %s", summary)
    return summary
