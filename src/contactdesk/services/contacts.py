"""Contact operations.

Wraps repository writes in a transaction and turns constraint
violations into domain errors.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from contactdesk.core.errors import ConflictError
from contactdesk.db import repo
from contactdesk.db.errors import classify_integrity_error
from contactdesk.db.repo import DbSession
from contactdesk.models.domain import ContactEntity

logger = logging.getLogger(__name__)


def find_all(session: DbSession) -> list[ContactEntity]:
    return repo.list_contacts(session)


def find_by_id(session: DbSession, contact_id: int) -> ContactEntity | None:
    return repo.get_contact(session, contact_id)


def create(session: DbSession, data: dict[str, Any]) -> ContactEntity:
    """Create a contact.

    Raises:
        ConflictError: If the email is already used by another contact.
    """
    try:
        contact = repo.create_contact(session, data)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        if classify_integrity_error(e) == "unique":
            raise ConflictError(f"Email already in use: {data.get('email')}") from e
        raise

    logger.info("Created contact %s", contact.id)
    return contact


def update(session: DbSession, contact_id: int, data: dict[str, Any]) -> ContactEntity | None:
    """Apply a partial update to a contact.

    Returns:
        Updated contact, or None if it doesn't exist.

    Raises:
        ConflictError: If the new email belongs to another contact.
    """
    try:
        contact = repo.update_contact(session, contact_id, data)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        if classify_integrity_error(e) == "unique":
            raise ConflictError(f"Email already in use: {data.get('email')}") from e
        raise

    return contact


def delete(session: DbSession, contact_id: int) -> bool:
    """Delete a contact. Returns False if it doesn't exist."""
    deleted = repo.delete_contact(session, contact_id)
    repo.commit(session)
    if deleted:
        logger.info("Deleted contact %s", contact_id)
    return deleted
