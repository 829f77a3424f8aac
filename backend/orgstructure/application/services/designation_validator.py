"""Reusable required-field and uniqueness checks for designation-keyed entities."""

from collections.abc import Awaitable, Callable

from orgstructure.domain.exceptions import DuplicateEntityError, ValidationError

ExistsCheck = Callable[[str, int | None], Awaitable[bool]]


class DesignationValidator:
    """Validation shared by every entity identified by a unique designation.

    Parameterized by the entity label used in error messages, so one
    instance serves StructureType, another serves Structure, and so on.
    """

    def __init__(self, entity_type: str):
        self._entity_type = entity_type

    def require(self, value: object | None, field: str, operation: str) -> None:
        """Raise ValidationError if ``value`` is missing or a blank string."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(
                field,
                f"{self._entity_type} {field} is required for {operation}",
            )

    async def ensure_unique(
        self,
        field: str,
        value: str,
        exists: ExistsCheck,
        exclude_id: int | None = None,
    ) -> None:
        """Raise DuplicateEntityError if ``exists(value, exclude_id)`` is true."""
        if await exists(value, exclude_id):
            raise DuplicateEntityError(self._entity_type, field, value)
