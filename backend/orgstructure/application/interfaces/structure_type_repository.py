"""Abstract repository interface (port) for StructureType persistence."""

from abc import ABC, abstractmethod

from orgstructure.domain.entities import StructureType

STRUCTURE_TYPE_SORT_FIELDS: frozenset[str] = frozenset(
    {"id", "designation_fr", "designation_en", "designation_ar"}
)


class StructureTypeRepository(ABC):
    """Port for structure type persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, type_id: int) -> StructureType | None:
        """Retrieve a single structure type by its ID."""
        ...

    @abstractmethod
    async def get_by_designation_fr(self, designation_fr: str) -> StructureType | None:
        """Retrieve a structure type by its unique French designation."""
        ...

    @abstractmethod
    async def get_by_designation_ar(self, designation_ar: str) -> StructureType | None:
        """First structure type with this Arabic designation (not unique)."""
        ...

    @abstractmethod
    async def get_by_designation_en(self, designation_en: str) -> StructureType | None:
        """First structure type with this English designation (not unique)."""
        ...

    @abstractmethod
    async def find_page(
        self,
        *,
        search: str | None = None,
        multilingual: bool = False,
        skip: int = 0,
        limit: int = 20,
        sort_by: str = "designation_fr",
        descending: bool = False,
    ) -> tuple[list[StructureType], int]:
        """Retrieve one ordered page plus the total number of matching rows.

        ``search`` is a case-insensitive substring matched against every
        designation and acronym field. ``multilingual`` keeps only types
        designated in at least two languages.
        """
        ...

    @abstractmethod
    async def count_all(self) -> int:
        ...

    @abstractmethod
    async def exists_by_id(self, type_id: int) -> bool:
        ...

    @abstractmethod
    async def exists_by_designation_fr(
        self, designation_fr: str, exclude_id: int | None = None
    ) -> bool:
        """True if another row (other than ``exclude_id``) holds this designation."""
        ...

    @abstractmethod
    async def create(self, structure_type: StructureType) -> StructureType:
        """Persist a new structure type and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, structure_type: StructureType) -> StructureType:
        """Update an existing structure type."""
        ...

    @abstractmethod
    async def delete(self, type_id: int) -> bool:
        """Delete a structure type. Returns True if deleted, False if not found."""
        ...
