"""Domain errors raised by the service layer.

Routes translate these into HTTP status codes; services never import
FastAPI.
"""

from __future__ import annotations


class ContactDeskError(Exception):
    """Base class for domain errors."""


class ConflictError(ContactDeskError):
    """A uniqueness rule would be violated."""


class InvalidReferenceError(ContactDeskError):
    """A foreign key points at a record that does not exist."""
