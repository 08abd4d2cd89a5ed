"""Mapping of domain errors to HTTP errors."""

import logfire
from fastapi import HTTPException, status

from persona.domain.error import (
    DomainError,
    DuplicateVoteError,
    NotFoundError,
    ValidationError,
    VoteOperationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTP error returned to the client.

    Storage failures are logged here and reported with a generic message.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with an error/message(/details) body
    """
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Validation Error",
                "message": str(error),
                "details": error.details,
            },
        )

    if isinstance(error, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not Found", "message": str(error)},
        )

    if isinstance(error, DuplicateVoteError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "Duplicate Vote", "message": str(error)},
        )

    if isinstance(error, VoteOperationError):
        logfire.error(
            "Vote operation failed",
            operation=error.operation,
            entity=error.entity,
            error=str(error.cause),
        )
    else:
        logfire.error("Unhandled domain error", error=str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "Internal Server Error",
            "message": "Vote operation failed, please try again",
        },
    )
