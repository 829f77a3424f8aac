"""Application service (use case) for Structure operations.

Every mutation validates completely before the first write: required
fields, then uniqueness of the French designation and acronym, then the
type reference, then the parent (through HierarchyManager). A failed
validation never touches the repository.
"""

import logging

from orgstructure.application.interfaces import (
    HIERARCHY_ORDER,
    STRUCTURE_SORT_FIELDS,
    StructureCriteria,
    StructureRepository,
    StructureTypeRepository,
)
from orgstructure.application.schemas import StructureCreate, StructureUpdate
from orgstructure.application.services.designation_validator import DesignationValidator
from orgstructure.application.services.hierarchy_manager import HierarchyManager
from orgstructure.application.services.pagination import resolve_page
from orgstructure.domain.entities import Page, Structure
from orgstructure.domain.exceptions import (
    EntityNotFoundError,
    HasChildrenError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class StructureService:
    """Orchestrates structure CRUD and read queries. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: StructureRepository,
        type_repository: StructureTypeRepository,
        hierarchy: HierarchyManager,
    ):
        self._repository = repository
        self._types = type_repository
        self._hierarchy = hierarchy
        self._validator = DesignationValidator("Structure")

    # ── Read operations ──────────────────────────────────────────────

    async def get_structure(self, structure_id: int) -> Structure:
        structure = await self._repository.get_by_id(structure_id)
        if structure is None:
            raise EntityNotFoundError("Structure", structure_id)
        return structure

    async def find_by_designation_fr(self, designation_fr: str) -> Structure | None:
        return await self._repository.get_by_designation_fr(designation_fr)

    async def find_by_acronym_fr(self, acronym_fr: str) -> Structure | None:
        return await self._repository.get_by_acronym_fr(acronym_fr)

    async def list_structures(
        self,
        criteria: StructureCriteria | None = None,
        *,
        page: int = 0,
        size: int = 20,
        sort_by: str = "designation_fr",
        sort_dir: str = "asc",
    ) -> Page[Structure]:
        """Paginated, filtered listing. Default order: French designation ascending."""
        skip, descending = resolve_page(page, size, sort_by, sort_dir, STRUCTURE_SORT_FIELDS)
        items, total = await self._repository.find_page(
            criteria or StructureCriteria(),
            skip=skip,
            limit=size,
            sort_by=sort_by,
            descending=descending,
        )
        return Page(items=items, total=total, page=page, size=size)

    async def search(
        self,
        term: str | None,
        *,
        with_context: bool = False,
        page: int = 0,
        size: int = 20,
        sort_by: str = "designation_fr",
        sort_dir: str = "asc",
    ) -> Page[Structure]:
        """Substring search; a blank term returns the unfiltered listing."""
        if term is None or not term.strip():
            criteria = StructureCriteria()
        else:
            criteria = StructureCriteria(search=term.strip(), search_context=with_context)
        return await self.list_structures(
            criteria, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
        )

    async def search_with_context(self, term: str | None, **paging) -> Page[Structure]:
        """Like ``search``, also matching the type and the parent's French names."""
        return await self.search(term, with_context=True, **paging)

    async def find_by_type(self, type_id: int, **paging) -> Page[Structure]:
        return await self.list_structures(StructureCriteria(structure_type_id=type_id), **paging)

    async def find_by_type_designation(self, designation_fr: str, **paging) -> Page[Structure]:
        """Structures whose type carries this exact French designation."""
        return await self.list_structures(
            StructureCriteria(type_designation_fr=designation_fr), **paging
        )

    async def list_by_hierarchy(self, *, page: int = 0, size: int = 20) -> Page[Structure]:
        """Roots first, then every structure grouped under its parent's French designation."""
        return await self.list_structures(page=page, size=size, sort_by=HIERARCHY_ORDER)

    async def find_with_children(self, **paging) -> Page[Structure]:
        return await self.list_structures(StructureCriteria(has_children=True), **paging)

    async def find_leaves(self, **paging) -> Page[Structure]:
        return await self.list_structures(StructureCriteria(has_children=False), **paging)

    async def find_multilingual(self, **paging) -> Page[Structure]:
        """Structures designated in at least two languages."""
        return await self.list_structures(StructureCriteria(multilingual=True), **paging)

    async def find_by_level(self, level: int, *, page: int = 0, size: int = 20) -> Page[Structure]:
        if level < 0:
            raise ValidationError("level", f"Hierarchy level must be >= 0, got {level}")
        return await self.list_structures(StructureCriteria(level=level), page=page, size=size)

    async def find_children(self, parent_id: int) -> list[Structure]:
        return await self._repository.find_children(parent_id)

    async def find_roots(self) -> list[Structure]:
        return await self._repository.find_roots()

    async def find_siblings(self, structure_id: int) -> list[Structure]:
        """Other structures sharing this structure's parent (roots are siblings of roots)."""
        structure = await self.get_structure(structure_id)
        if structure.parent_id is None:
            candidates = await self._repository.find_roots()
        else:
            candidates = await self._repository.find_children(structure.parent_id)
        return [s for s in candidates if s.id != structure_id]

    async def count_direct_children(self, structure_id: int) -> int:
        return await self._repository.count_direct_children(structure_id)

    async def count_all(self) -> int:
        return await self._repository.count_all()

    async def count_by_type(self, type_id: int) -> int:
        return await self._repository.count_by_type(type_id)

    async def count_roots(self) -> int:
        return await self._repository.count_roots()

    async def exists_by_id(self, structure_id: int) -> bool:
        return await self._repository.exists_by_id(structure_id)

    async def exists_by_designation_fr(self, designation_fr: str) -> bool:
        return await self._repository.exists_by_designation_fr(designation_fr)

    async def exists_by_acronym_fr(self, acronym_fr: str) -> bool:
        return await self._repository.exists_by_acronym_fr(acronym_fr)

    # ── Write operations ─────────────────────────────────────────────

    async def create_structure(self, data: StructureCreate) -> Structure:
        logger.info(
            "Creating structure '%s' (%s), type=%s, parent=%s",
            data.designation_fr,
            data.acronym_fr,
            data.structure_type_id,
            data.parent_id,
        )
        await self._validate(data, operation="create")
        if data.parent_id is not None:
            await self._hierarchy.validate_parent(data.parent_id)

        structure = Structure(
            designation_fr=data.designation_fr,
            designation_ar=data.designation_ar,
            designation_en=data.designation_en,
            acronym_fr=data.acronym_fr,
            acronym_ar=data.acronym_ar,
            acronym_en=data.acronym_en,
            structure_type_id=data.structure_type_id,
            parent_id=data.parent_id,
        )
        created = await self._repository.create(structure)
        logger.info("Created structure %s", created.id)
        return created

    async def update_structure(self, structure_id: int, data: StructureUpdate) -> Structure:
        logger.info("Updating structure %s, parent=%s", structure_id, data.parent_id)
        structure = await self.get_structure(structure_id)
        await self._validate(data, operation="update", exclude_id=structure_id)
        if data.parent_id is not None:
            await self._hierarchy.validate_parent(data.parent_id, structure_id)

        structure.update(
            designation_fr=data.designation_fr,
            designation_ar=data.designation_ar,
            designation_en=data.designation_en,
            acronym_fr=data.acronym_fr,
            acronym_ar=data.acronym_ar,
            acronym_en=data.acronym_en,
            structure_type_id=data.structure_type_id,
            parent_id=data.parent_id,
        )
        updated = await self._repository.update(structure)
        logger.info("Updated structure %s", structure_id)
        return updated

    async def delete_structure(self, structure_id: int) -> bool:
        """Delete a leaf structure. Non-leaf nodes are rejected, never cascaded."""
        logger.info("Deleting structure %s", structure_id)
        if not await self._repository.exists_by_id(structure_id):
            raise EntityNotFoundError("Structure", structure_id)

        children = await self._repository.count_direct_children(structure_id)
        if children > 0:
            raise HasChildrenError(structure_id, children)

        deleted = await self._repository.delete(structure_id)
        logger.info("Deleted structure %s", structure_id)
        return deleted

    # ── Validation ───────────────────────────────────────────────────

    async def _validate(
        self,
        data: StructureCreate,
        *,
        operation: str,
        exclude_id: int | None = None,
    ) -> None:
        self._validator.require(data.designation_fr, "designation_fr", operation)
        self._validator.require(data.acronym_fr, "acronym_fr", operation)
        self._validator.require(data.structure_type_id, "structure_type_id", operation)

        await self._validator.ensure_unique(
            "designation_fr",
            data.designation_fr,
            self._repository.exists_by_designation_fr,
            exclude_id,
        )
        await self._validator.ensure_unique(
            "acronym_fr",
            data.acronym_fr,
            self._repository.exists_by_acronym_fr,
            exclude_id,
        )

        if not await self._types.exists_by_id(data.structure_type_id):
            raise EntityNotFoundError("StructureType", data.structure_type_id)
