"""Contacts API endpoint.

GET    /api/v1/contact/list - List contacts, newest first
GET    /api/v1/contact/{id} - Get contact
POST   /api/v1/contact      - Create contact
PUT    /api/v1/contact/{id} - Update contact
DELETE /api/v1/contact/{id} - Delete contact
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path

from contactdesk.api.app import get_db_session
from contactdesk.api.response import success_response
from contactdesk.core.errors import ConflictError
from contactdesk.db.repo import DbSession
from contactdesk.models.dto import MAX_ID, ContactCreate, ContactUpdate
from contactdesk.models.types import ApiResponse, ContactDetail
from contactdesk.services import contacts as contact_service

router = APIRouter()

ContactId = Annotated[int, Path(gt=0, le=MAX_ID, description="Contact ID")]


@router.get("/list", response_model=ApiResponse[list[ContactDetail]])
def list_contacts(session: DbSession = Depends(get_db_session)):
    """List all contacts, newest first."""
    contacts = contact_service.find_all(session)
    return success_response(
        [ContactDetail.model_validate(c) for c in contacts], "Contacts retrieved"
    )


@router.get("/{id}", response_model=ApiResponse[ContactDetail])
def get_contact(id: ContactId, session: DbSession = Depends(get_db_session)):
    """Get a contact.

    Raises:
        HTTPException: 404 if contact not found.
    """
    contact = contact_service.find_by_id(session, id)

    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")

    return success_response(ContactDetail.model_validate(contact))


@router.post("", response_model=ApiResponse[ContactDetail], status_code=201)
@router.post("/", response_model=ApiResponse[ContactDetail], status_code=201, include_in_schema=False)
def create_contact(payload: ContactCreate, session: DbSession = Depends(get_db_session)):
    """Create a contact.

    Raises:
        HTTPException: 409 if the email is already used.
    """
    try:
        contact = contact_service.create(session, payload.to_record())
    except ConflictError as e:
        raise HTTPException(status_code=409, detail="This email address is already in use") from e

    return success_response(ContactDetail.model_validate(contact), "Contact created")


@router.put("/{id}", response_model=ApiResponse[ContactDetail])
def update_contact(
    id: ContactId,
    payload: ContactUpdate,
    session: DbSession = Depends(get_db_session),
):
    """Update some or all fields of a contact.

    Raises:
        HTTPException: 404 if contact not found, 409 if the email belongs to another contact.
    """
    try:
        contact = contact_service.update(session, id, payload.to_record())
    except ConflictError as e:
        raise HTTPException(
            status_code=409, detail="This email is already associated with another contact"
        ) from e

    if contact is None:
        raise HTTPException(status_code=404, detail="Contact not found")

    return success_response(ContactDetail.model_validate(contact), "Contact updated")


@router.delete("/{id}", response_model=ApiResponse[None])
def delete_contact(id: ContactId, session: DbSession = Depends(get_db_session)):
    """Delete a contact; their tasks are unassigned and memberships removed.

    Raises:
        HTTPException: 404 if contact not found.
    """
    if not contact_service.delete(session, id):
        raise HTTPException(status_code=404, detail="Contact not found")

    return success_response(None, "Contact deleted")
