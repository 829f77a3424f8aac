"""In-memory fake repositories and service fixtures for unit tests."""

from dataclasses import replace

import pytest
import pytest_asyncio

from orgstructure.application.interfaces import (
    HIERARCHY_ORDER,
    StructureCriteria,
    StructureRepository,
    StructureTypeRepository,
)
from orgstructure.application.schemas import StructureCreate, StructureTypeCreate
from orgstructure.application.services import (
    HierarchyManager,
    StructureService,
    StructureTypeService,
)
from orgstructure.domain.entities import Structure, StructureType
from orgstructure.domain.multilingual import is_multilingual


def _sort_key(field: str):
    return lambda entity: ((getattr(entity, field) or ""), entity.id)


def _matches(value: str | None, term: str) -> bool:
    return value is not None and term in value.lower()


class FakeStructureTypeRepository(StructureTypeRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._types: dict[int, StructureType] = {}
        self._next_id = 1

    async def get_by_id(self, type_id: int) -> StructureType | None:
        stored = self._types.get(type_id)
        return replace(stored) if stored else None

    async def get_by_designation_fr(self, designation_fr: str) -> StructureType | None:
        for stored in self._types.values():
            if stored.designation_fr == designation_fr:
                return replace(stored)
        return None

    async def get_by_designation_ar(self, designation_ar: str) -> StructureType | None:
        return self._first_where("designation_ar", designation_ar)

    async def get_by_designation_en(self, designation_en: str) -> StructureType | None:
        return self._first_where("designation_en", designation_en)

    def _first_where(self, field: str, value: str) -> StructureType | None:
        for type_id in sorted(self._types):
            if getattr(self._types[type_id], field) == value:
                return replace(self._types[type_id])
        return None

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
        items = list(self._types.values())
        if search:
            term = search.lower()
            items = [
                t for t in items
                if any(
                    _matches(v, term)
                    for v in (
                        t.designation_fr, t.designation_en, t.designation_ar,
                        t.acronym_fr, t.acronym_en, t.acronym_ar,
                    )
                )
            ]
        if multilingual:
            items = [t for t in items if is_multilingual(t)]
        items.sort(key=_sort_key(sort_by), reverse=descending)
        return [replace(t) for t in items[skip : skip + limit]], len(items)

    async def count_all(self) -> int:
        return len(self._types)

    async def exists_by_id(self, type_id: int) -> bool:
        return type_id in self._types

    async def exists_by_designation_fr(
        self, designation_fr: str, exclude_id: int | None = None
    ) -> bool:
        return any(
            t.designation_fr == designation_fr and t.id != exclude_id
            for t in self._types.values()
        )

    async def create(self, structure_type: StructureType) -> StructureType:
        structure_type.id = self._next_id
        self._next_id += 1
        self._types[structure_type.id] = replace(structure_type)
        return structure_type

    async def update(self, structure_type: StructureType) -> StructureType:
        if structure_type.id not in self._types:
            raise ValueError(f"StructureType {structure_type.id} not found")
        self._types[structure_type.id] = replace(structure_type)
        return structure_type

    async def delete(self, type_id: int) -> bool:
        return self._types.pop(type_id, None) is not None


class FakeStructureRepository(StructureRepository):
    """In-memory fake repository for unit testing.

    ``types`` lets the context search resolve type designations.
    """

    def __init__(self, types: FakeStructureTypeRepository | None = None):
        self._structures: dict[int, Structure] = {}
        self._next_id = 1
        self._types = types

    # Test helper: write a row without any validation (e.g. corrupted parent links).
    def put(self, structure: Structure) -> Structure:
        if structure.id is None:
            structure.id = self._next_id
        self._next_id = max(self._next_id, structure.id + 1)
        self._structures[structure.id] = replace(structure)
        return structure

    def _ordered(self, items: list[Structure]) -> list[Structure]:
        return sorted(items, key=_sort_key("designation_fr"))

    def _depth(self, structure: Structure) -> int:
        depth, current, seen = 0, structure, {structure.id}
        while current.parent_id is not None and current.parent_id in self._structures:
            if current.parent_id in seen:
                break
            seen.add(current.parent_id)
            current = self._structures[current.parent_id]
            depth += 1
        return depth

    async def get_by_id(self, structure_id: int) -> Structure | None:
        stored = self._structures.get(structure_id)
        return replace(stored) if stored else None

    async def get_by_designation_fr(self, designation_fr: str) -> Structure | None:
        for stored in self._structures.values():
            if stored.designation_fr == designation_fr:
                return replace(stored)
        return None

    async def get_by_acronym_fr(self, acronym_fr: str) -> Structure | None:
        for stored in self._structures.values():
            if stored.acronym_fr == acronym_fr:
                return replace(stored)
        return None

    async def find_all(self) -> list[Structure]:
        return [replace(s) for s in self._ordered(list(self._structures.values()))]

    async def find_page(
        self,
        criteria: StructureCriteria,
        *,
        skip: int = 0,
        limit: int = 20,
        sort_by: str = "designation_fr",
        descending: bool = False,
    ) -> tuple[list[Structure], int]:
        items = list(self._structures.values())
        parent_ids = {s.parent_id for s in items}

        if criteria.structure_type_id is not None:
            items = [s for s in items if s.structure_type_id == criteria.structure_type_id]
        if criteria.type_designation_fr is not None:
            types = self._types._types if self._types is not None else {}
            items = [
                s for s in items
                if s.structure_type_id in types
                and types[s.structure_type_id].designation_fr == criteria.type_designation_fr
            ]
        if criteria.parent_id is not None:
            items = [s for s in items if s.parent_id == criteria.parent_id]
        if criteria.roots_only:
            items = [s for s in items if s.parent_id is None]
        if criteria.has_children is not None:
            items = [s for s in items if (s.id in parent_ids) == criteria.has_children]
        if criteria.multilingual:
            items = [s for s in items if is_multilingual(s)]
        if criteria.level is not None:
            items = [
                s for s in items
                if self._depth(s) == criteria.level
            ]
        if criteria.search:
            term = criteria.search.lower()
            items = [s for s in items if self._search_hit(s, term, criteria.search_context)]

        if sort_by == HIERARCHY_ORDER:
            items.sort(key=self._hierarchy_key, reverse=descending)
        else:
            items.sort(key=_sort_key(sort_by), reverse=descending)
        return [replace(s) for s in items[skip : skip + limit]], len(items)

    def _hierarchy_key(self, s: Structure):
        parent = self._structures.get(s.parent_id) if s.parent_id else None
        return (parent.designation_fr if parent else "", s.designation_fr, s.id)

    def _search_hit(self, s: Structure, term: str, with_context: bool) -> bool:
        values = [
            s.designation_fr, s.designation_en, s.designation_ar,
            s.acronym_fr, s.acronym_en, s.acronym_ar,
        ]
        if with_context:
            if self._types is not None and s.structure_type_id in self._types._types:
                values.append(self._types._types[s.structure_type_id].designation_fr)
            parent = self._structures.get(s.parent_id) if s.parent_id else None
            if parent is not None:
                values += [parent.designation_fr, parent.acronym_fr]
        return any(_matches(v, term) for v in values)

    async def find_children(self, parent_id: int) -> list[Structure]:
        children = [s for s in self._structures.values() if s.parent_id == parent_id]
        return [replace(s) for s in self._ordered(children)]

    async def find_roots(self) -> list[Structure]:
        roots = [s for s in self._structures.values() if s.parent_id is None]
        return [replace(s) for s in self._ordered(roots)]

    async def count_direct_children(self, structure_id: int) -> int:
        return sum(1 for s in self._structures.values() if s.parent_id == structure_id)

    async def count_all(self) -> int:
        return len(self._structures)

    async def count_by_type(self, type_id: int) -> int:
        return sum(1 for s in self._structures.values() if s.structure_type_id == type_id)

    async def count_roots(self) -> int:
        return sum(1 for s in self._structures.values() if s.parent_id is None)

    async def exists_by_id(self, structure_id: int) -> bool:
        return structure_id in self._structures

    async def exists_by_designation_fr(
        self, designation_fr: str, exclude_id: int | None = None
    ) -> bool:
        return any(
            s.designation_fr == designation_fr and s.id != exclude_id
            for s in self._structures.values()
        )

    async def exists_by_acronym_fr(
        self, acronym_fr: str, exclude_id: int | None = None
    ) -> bool:
        return any(
            s.acronym_fr == acronym_fr and s.id != exclude_id
            for s in self._structures.values()
        )

    async def create(self, structure: Structure) -> Structure:
        structure.id = self._next_id
        self._next_id += 1
        self._structures[structure.id] = replace(structure)
        return structure

    async def update(self, structure: Structure) -> Structure:
        if structure.id not in self._structures:
            raise ValueError(f"Structure {structure.id} not found")
        self._structures[structure.id] = replace(structure)
        return structure

    async def delete(self, structure_id: int) -> bool:
        return self._structures.pop(structure_id, None) is not None


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def type_repo() -> FakeStructureTypeRepository:
    return FakeStructureTypeRepository()


@pytest.fixture
def structure_repo(type_repo: FakeStructureTypeRepository) -> FakeStructureRepository:
    return FakeStructureRepository(type_repo)


@pytest.fixture
def hierarchy(structure_repo: FakeStructureRepository) -> HierarchyManager:
    return HierarchyManager(structure_repo, max_depth=64)


@pytest.fixture
def type_service(
    type_repo: FakeStructureTypeRepository, structure_repo: FakeStructureRepository
) -> StructureTypeService:
    return StructureTypeService(type_repo, structure_repo)


@pytest.fixture
def structure_service(
    structure_repo: FakeStructureRepository,
    type_repo: FakeStructureTypeRepository,
    hierarchy: HierarchyManager,
) -> StructureService:
    return StructureService(structure_repo, type_repo, hierarchy)


@pytest_asyncio.fixture
async def unit_type(type_service: StructureTypeService) -> StructureType:
    """A structure type every test structure can reference."""
    return await type_service.create_structure_type(
        StructureTypeCreate(designation_fr="Direction Centrale", designation_en="Central Directorate")
    )


@pytest.fixture
def make_structure(structure_service: StructureService, unit_type: StructureType):
    """Factory creating a structure through the service, named after its acronym."""

    async def _make(acronym: str, parent_id: int | None = None, **fields) -> Structure:
        data = StructureCreate(
            designation_fr=fields.pop("designation_fr", f"Structure {acronym}"),
            acronym_fr=acronym,
            structure_type_id=fields.pop("structure_type_id", unit_type.id),
            parent_id=parent_id,
            **fields,
        )
        return await structure_service.create_structure(data)

    return _make
