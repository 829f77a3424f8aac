"""Abstract repository interface (port) for Structure persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from orgstructure.domain.entities import Structure

# Pseudo sort field: roots first, then each structure grouped under its parent's name.
HIERARCHY_ORDER = "hierarchy"

STRUCTURE_SORT_FIELDS: frozenset[str] = frozenset(
    {"id", "designation_fr", "designation_en", "designation_ar", "acronym_fr", HIERARCHY_ORDER}
)


@dataclass(frozen=True)
class StructureCriteria:
    """Filters for paginated structure queries. All set filters are ANDed.

    Attributes:
        structure_type_id: Only structures of this type.
        type_designation_fr: Only structures whose type has this French designation.
        parent_id: Only direct children of this structure.
        roots_only: Only structures without a parent.
        has_children: True → only non-leaf nodes, False → only leaves.
        level: Only structures at this depth (0 = roots).
        multilingual: Only structures designated in at least two languages.
        search: Case-insensitive substring over designations and acronyms.
        search_context: Also match the type designation and the parent's
            French designation / acronym.
    """

    structure_type_id: int | None = None
    type_designation_fr: str | None = None
    parent_id: int | None = None
    roots_only: bool = False
    has_children: bool | None = None
    level: int | None = None
    multilingual: bool = False
    search: str | None = None
    search_context: bool = False


class StructureRepository(ABC):
    """Port for structure persistence — implemented in the infrastructure layer."""

    # ── Lookups ──────────────────────────────────────────────────────

    @abstractmethod
    async def get_by_id(self, structure_id: int) -> Structure | None:
        """Retrieve a single structure by its ID."""
        ...

    @abstractmethod
    async def get_by_designation_fr(self, designation_fr: str) -> Structure | None:
        ...

    @abstractmethod
    async def get_by_acronym_fr(self, acronym_fr: str) -> Structure | None:
        ...

    @abstractmethod
    async def find_all(self) -> list[Structure]:
        """Every structure, ordered by French designation."""
        ...

    @abstractmethod
    async def find_page(
        self,
        criteria: StructureCriteria,
        *,
        skip: int = 0,
        limit: int = 20,
        sort_by: str = "designation_fr",
        descending: bool = False,
    ) -> tuple[list[Structure], int]:
        """Retrieve one ordered page plus the total number of matching rows."""
        ...

    # ── Hierarchy ────────────────────────────────────────────────────

    @abstractmethod
    async def find_children(self, parent_id: int) -> list[Structure]:
        """Direct children of a structure, ordered by French designation."""
        ...

    @abstractmethod
    async def find_roots(self) -> list[Structure]:
        """Structures without a parent, ordered by French designation."""
        ...

    @abstractmethod
    async def count_direct_children(self, structure_id: int) -> int:
        ...

    # ── Counts & existence ───────────────────────────────────────────

    @abstractmethod
    async def count_all(self) -> int:
        ...

    @abstractmethod
    async def count_by_type(self, type_id: int) -> int:
        ...

    @abstractmethod
    async def count_roots(self) -> int:
        ...

    @abstractmethod
    async def exists_by_id(self, structure_id: int) -> bool:
        ...

    @abstractmethod
    async def exists_by_designation_fr(
        self, designation_fr: str, exclude_id: int | None = None
    ) -> bool:
        """True if a row other than ``exclude_id`` holds this French designation."""
        ...

    @abstractmethod
    async def exists_by_acronym_fr(
        self, acronym_fr: str, exclude_id: int | None = None
    ) -> bool:
        """True if a row other than ``exclude_id`` holds this French acronym."""
        ...

    # ── Mutations ────────────────────────────────────────────────────

    @abstractmethod
    async def create(self, structure: Structure) -> Structure:
        """Persist a new structure and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, structure: Structure) -> Structure:
        """Update an existing structure."""
        ...

    @abstractmethod
    async def delete(self, structure_id: int) -> bool:
        """Delete a structure. Returns True if deleted, False if not found."""
        ...
