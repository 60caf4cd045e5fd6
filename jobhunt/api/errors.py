"""
Translation of service errors into HTTP responses.
"""
from fastapi import HTTPException, status

from jobhunt.core.errors import (
    JobHuntError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
    InvalidReferenceError,
    ValidationError,
)

# Forbidden collapses into 404 so a client cannot tell "not yours" from "absent"
STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidReferenceError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def to_http_exception(error: JobHuntError) -> HTTPException:
    """Map a JobHuntError onto an HTTPException carrying its message."""
    status_code = STATUS_BY_ERROR.get(type(error), status.HTTP_400_BAD_REQUEST)
    detail = error.message
    if isinstance(error, ForbiddenError):
        detail = "Experience or bullet not found"
    return HTTPException(status_code=status_code, detail=detail)
