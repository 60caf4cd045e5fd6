"""
Logical error kinds raised by the JobHunt services.

Services raise these and never transport-level exceptions; the API layer
translates them into HTTP responses (see jobhunt.api.errors).
"""
from typing import Optional


class JobHuntError(Exception):
    """
    Base class for all domain errors.

    Attributes:
        message: Human readable description, safe to return to clients
        entity: Name of the entity involved (e.g. 'bullet', 'experience')
    """

    def __init__(self, message: str, entity: Optional[str] = None):
        self.message = message
        self.entity = entity
        super().__init__(message)


class NotFoundError(JobHuntError):
    """Referenced row does not exist, or exists but belongs to another user."""


class ForbiddenError(JobHuntError):
    """Rows exist but are not owned by the requesting user."""


class ConflictError(JobHuntError):
    """Unique constraint violation (duplicate association)."""


class InvalidReferenceError(JobHuntError):
    """Foreign key violation: a referenced parent row vanished."""


class ValidationError(JobHuntError):
    """Malformed input reached a service despite request validation."""
