"""Projects API endpoint.

GET    /api/v1/project/list                     - List projects (filter: status)
GET    /api/v1/project/{id}                     - Get project with members and tasks
POST   /api/v1/project                          - Create project
PUT    /api/v1/project/{id}                     - Update project
DELETE /api/v1/project/{id}                     - Delete project (cascades)
GET    /api/v1/project/{id}/stats               - Task/member statistics
POST   /api/v1/project/{id}/members             - Add member
GET    /api/v1/project/{id}/members             - List members
DELETE /api/v1/project/{id}/members/{contactId} - Remove member
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path

from contactdesk.api.app import get_db_session
from contactdesk.api.response import success_response
from contactdesk.core.errors import ConflictError, InvalidReferenceError
from contactdesk.db.repo import DbSession
from contactdesk.models.dto import MAX_ID, MemberAdd, ProjectCreate, ProjectUpdate
from contactdesk.models.types import (
    ApiResponse,
    MemberDetail,
    ProjectDetail,
    ProjectStatsDetail,
    ProjectSummary,
)
from contactdesk.services import projects as project_service

router = APIRouter()

ProjectId = Annotated[int, Path(gt=0, le=MAX_ID, description="Project ID")]
ContactId = Annotated[int, Path(gt=0, le=MAX_ID, description="Contact ID")]


@router.get("/list", response_model=ApiResponse[list[ProjectSummary]])
def list_projects(
    status: str | None = None,
    session: DbSession = Depends(get_db_session),
):
    """List projects, newest first, with members, task summaries and counts."""
    projects = project_service.find_all(session, status=status or None)
    return success_response(
        [ProjectSummary.model_validate(p) for p in projects], "Projects retrieved"
    )


@router.get("/{id}", response_model=ApiResponse[ProjectDetail])
def get_project(id: ProjectId, session: DbSession = Depends(get_db_session)):
    """Get a project.

    Raises:
        HTTPException: 404 if project not found.
    """
    project = project_service.find_by_id(session, id)

    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")

    return success_response(ProjectDetail.model_validate(project))


@router.post("", response_model=ApiResponse[ProjectSummary], status_code=201)
@router.post("/", response_model=ApiResponse[ProjectSummary], status_code=201, include_in_schema=False)
def create_project(payload: ProjectCreate, session: DbSession = Depends(get_db_session)):
    """Create a project."""
    project = project_service.create(session, payload.to_record())
    return success_response(ProjectSummary.model_validate(project), "Project created")


@router.put("/{id}", response_model=ApiResponse[ProjectSummary])
def update_project(
    id: ProjectId,
    payload: ProjectUpdate,
    session: DbSession = Depends(get_db_session),
):
    """Update some or all fields of a project.

    Raises:
        HTTPException: 404 if project not found.
    """
    project = project_service.update(session, id, payload.to_record())

    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")

    return success_response(ProjectSummary.model_validate(project), "Project updated")


@router.delete("/{id}", response_model=ApiResponse[None])
def delete_project(id: ProjectId, session: DbSession = Depends(get_db_session)):
    """Delete a project along with its tasks and memberships.

    Raises:
        HTTPException: 404 if project not found.
    """
    if not project_service.remove(session, id):
        raise HTTPException(status_code=404, detail="Project not found")

    return success_response(None, "Project deleted")


@router.get("/{id}/stats", response_model=ApiResponse[ProjectStatsDetail])
def get_project_stats(id: ProjectId, session: DbSession = Depends(get_db_session)):
    """Count a project's tasks (in total and per status) and members.

    Raises:
        HTTPException: 404 if project not found.
    """
    stats = project_service.get_stats(session, id)

    if stats is None:
        raise HTTPException(status_code=404, detail="Project not found")

    return success_response(ProjectStatsDetail.model_validate(stats))


# ============================================================================
# Members
# ============================================================================


@router.post("/{id}/members", response_model=ApiResponse[MemberDetail], status_code=201)
def add_member(
    id: ProjectId,
    payload: MemberAdd,
    session: DbSession = Depends(get_db_session),
):
    """Add a contact to a project.

    Raises:
        HTTPException: 409 if already a member, 404 if project or contact not found.
    """
    try:
        member = project_service.add_member(session, id, payload.contact_id, payload.role)
    except ConflictError as e:
        raise HTTPException(
            status_code=409, detail="This contact is already a member of the project"
        ) from e
    except InvalidReferenceError as e:
        raise HTTPException(status_code=404, detail="Project or contact not found") from e

    return success_response(MemberDetail.model_validate(member), "Member added to project")


@router.get("/{id}/members", response_model=ApiResponse[list[MemberDetail]])
def list_members(id: ProjectId, session: DbSession = Depends(get_db_session)):
    """List a project's members in the order they joined."""
    members = project_service.get_members(session, id)
    return success_response([MemberDetail.model_validate(m) for m in members])


@router.delete("/{id}/members/{contact_id}", response_model=ApiResponse[None])
def remove_member(
    id: ProjectId,
    contact_id: ContactId,
    session: DbSession = Depends(get_db_session),
):
    """Remove a contact from a project.

    Raises:
        HTTPException: 404 if the contact is not a member.
    """
    if not project_service.remove_member(session, id, contact_id):
        raise HTTPException(status_code=404, detail="Member not found in this project")

    return success_response(None, "Member removed from project")
