"""Mapping of domain exceptions onto HTTP errors."""

from fastapi import HTTPException, status

from orgstructure.domain.exceptions import (
    DomainError,
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    HasChildrenError,
    HierarchyCycleError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    HierarchyCycleError: status.HTTP_409_CONFLICT,
    HasChildrenError: status.HTTP_409_CONFLICT,
    EntityInUseError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


def to_http_exception(exc: DomainError) -> HTTPException:
    """Translate a domain error into the HTTPException a controller raises."""
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
