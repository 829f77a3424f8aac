"""Translation of database constraint violations into domain errors."""

from sqlalchemy.exc import IntegrityError

from orgstructure.domain.exceptions import DuplicateEntityError


def duplicate_from_integrity_error(
    exc: IntegrityError,
    entity_type: str,
    candidates: dict[str, str | None],
) -> DuplicateEntityError | None:
    """Map a UNIQUE violation onto the offending field, if one can be identified.

    ``candidates`` maps unique column names to the values that were written.
    SQLite reports ``UNIQUE constraint failed: table.column`` and PostgreSQL
    names the ``uq_<table>_<column>`` constraint; both contain the column.
    """
    message = str(exc.orig)
    if "unique" not in message.lower():
        return None
    for field, value in candidates.items():
        if field in message:
            return DuplicateEntityError(entity_type, field, value or "")
    return None
