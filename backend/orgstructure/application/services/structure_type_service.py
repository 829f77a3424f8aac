"""Application service (use case) for StructureType operations."""

import logging

from orgstructure.application.interfaces import (
    STRUCTURE_TYPE_SORT_FIELDS,
    StructureRepository,
    StructureTypeRepository,
)
from orgstructure.application.schemas import StructureTypeCreate, StructureTypeUpdate
from orgstructure.application.services.designation_validator import DesignationValidator
from orgstructure.application.services.pagination import resolve_page
from orgstructure.domain.entities import Page, StructureType
from orgstructure.domain.exceptions import EntityInUseError, EntityNotFoundError

logger = logging.getLogger(__name__)


class StructureTypeService:
    """Orchestrates structure type CRUD. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: StructureTypeRepository,
        structure_repository: StructureRepository,
    ):
        self._repository = repository
        self._structures = structure_repository
        self._validator = DesignationValidator("StructureType")

    async def get_structure_type(self, type_id: int) -> StructureType:
        structure_type = await self._repository.get_by_id(type_id)
        if structure_type is None:
            raise EntityNotFoundError("StructureType", type_id)
        return structure_type

    async def find_by_designation_fr(self, designation_fr: str) -> StructureType | None:
        return await self._repository.get_by_designation_fr(designation_fr)

    async def find_by_designation_ar(self, designation_ar: str) -> StructureType | None:
        return await self._repository.get_by_designation_ar(designation_ar)

    async def find_by_designation_en(self, designation_en: str) -> StructureType | None:
        return await self._repository.get_by_designation_en(designation_en)

    async def list_structure_types(
        self,
        *,
        page: int = 0,
        size: int = 20,
        sort_by: str = "designation_fr",
        sort_dir: str = "asc",
        search: str | None = None,
        multilingual: bool = False,
    ) -> Page[StructureType]:
        skip, descending = resolve_page(
            page, size, sort_by, sort_dir, STRUCTURE_TYPE_SORT_FIELDS
        )
        term = search.strip() if search and search.strip() else None
        items, total = await self._repository.find_page(
            search=term,
            multilingual=multilingual,
            skip=skip,
            limit=size,
            sort_by=sort_by,
            descending=descending,
        )
        return Page(items=items, total=total, page=page, size=size)

    async def search(self, term: str | None, **paging) -> Page[StructureType]:
        """Substring search; a blank term returns the unfiltered listing."""
        return await self.list_structure_types(search=term, **paging)

    async def find_multilingual(self, **paging) -> Page[StructureType]:
        """Structure types designated in at least two languages."""
        return await self.list_structure_types(multilingual=True, **paging)

    async def count_all(self) -> int:
        return await self._repository.count_all()

    async def exists_by_id(self, type_id: int) -> bool:
        return await self._repository.exists_by_id(type_id)

    async def exists_by_designation_fr(self, designation_fr: str) -> bool:
        return await self._repository.exists_by_designation_fr(designation_fr)

    async def create_structure_type(self, data: StructureTypeCreate) -> StructureType:
        logger.info("Creating structure type '%s'", data.designation_fr)
        self._validator.require(data.designation_fr, "designation_fr", "create")
        await self._validator.ensure_unique(
            "designation_fr",
            data.designation_fr,
            self._repository.exists_by_designation_fr,
        )

        structure_type = StructureType(
            designation_fr=data.designation_fr,
            designation_ar=data.designation_ar,
            designation_en=data.designation_en,
            acronym_fr=data.acronym_fr,
            acronym_ar=data.acronym_ar,
            acronym_en=data.acronym_en,
        )
        created = await self._repository.create(structure_type)
        logger.info("Created structure type %s", created.id)
        return created

    async def update_structure_type(
        self, type_id: int, data: StructureTypeUpdate
    ) -> StructureType:
        logger.info("Updating structure type %s", type_id)
        structure_type = await self.get_structure_type(type_id)
        self._validator.require(data.designation_fr, "designation_fr", "update")
        await self._validator.ensure_unique(
            "designation_fr",
            data.designation_fr,
            self._repository.exists_by_designation_fr,
            exclude_id=type_id,
        )

        structure_type.update(
            designation_fr=data.designation_fr,
            designation_ar=data.designation_ar,
            designation_en=data.designation_en,
            acronym_fr=data.acronym_fr,
            acronym_ar=data.acronym_ar,
            acronym_en=data.acronym_en,
        )
        updated = await self._repository.update(structure_type)
        logger.info("Updated structure type %s", type_id)
        return updated

    async def delete_structure_type(self, type_id: int) -> bool:
        """Delete a type that no structure references."""
        logger.info("Deleting structure type %s", type_id)
        if not await self._repository.exists_by_id(type_id):
            raise EntityNotFoundError("StructureType", type_id)

        usage = await self._structures.count_by_type(type_id)
        if usage > 0:
            raise EntityInUseError("StructureType", type_id, usage)

        return await self._repository.delete(type_id)
