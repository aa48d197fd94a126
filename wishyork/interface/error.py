"""Interface layer error translation.

Maps domain and request errors onto HTTP responses.
"""

import logfire
from fastapi import HTTPException, status

from wishyork.domain.error import (
    BatchCommitError,
    BusinessRuleViolationError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Translate an error raised by a use case into an HTTPException.

    Args:
        error: DomainError or ValueError from the application layer
        action: What the request tried to do, for logs and messages

    Returns:
        HTTPException with the matching status code
    """
    if isinstance(error, NotAuthorizedError):
        logfire.warn(f"Unauthorized attempt to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action}",
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, BusinessRuleViolationError):
        logfire.warn(f"Rejected attempt to {action}", error=str(error))
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, BatchCommitError):
        logfire.error(f"Failed to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Could not {action}, please try again",
        )
    if isinstance(error, (ValidationError, ValueError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    logfire.error(f"Unexpected error trying to {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


HANDLED_ERRORS = (DomainError, ValueError)
