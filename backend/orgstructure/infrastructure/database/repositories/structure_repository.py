"""SQLAlchemy implementation of the StructureRepository."""

from sqlalchemy import Integer, Select, func, literal_column, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from orgstructure.application.interfaces import (
    HIERARCHY_ORDER,
    StructureCriteria,
    StructureRepository,
)
from orgstructure.domain.entities import Structure
from orgstructure.domain.exceptions import EntityNotFoundError
from orgstructure.infrastructure.database.models import StructureModel, StructureTypeModel
from orgstructure.infrastructure.database.repositories.expressions import (
    designated_in_several_languages,
)
from orgstructure.infrastructure.database.repositories.integrity import (
    duplicate_from_integrity_error,
)


class SQLAlchemyStructureRepository(StructureRepository):
    """Concrete structure repository backed by SQLite/PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Read Operations ──────────────────────────────────────────────

    async def get_by_id(self, structure_id: int) -> Structure | None:
        model = await self._session.get(StructureModel, structure_id)
        return self._to_domain(model) if model else None

    async def get_by_designation_fr(self, designation_fr: str) -> Structure | None:
        return await self._first(StructureModel.designation_fr == designation_fr)

    async def get_by_acronym_fr(self, acronym_fr: str) -> Structure | None:
        return await self._first(StructureModel.acronym_fr == acronym_fr)

    async def find_all(self) -> list[Structure]:
        result = await self._session.execute(
            select(StructureModel).order_by(StructureModel.designation_fr, StructureModel.id)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def find_page(
        self,
        criteria: StructureCriteria,
        *,
        skip: int = 0,
        limit: int = 20,
        sort_by: str = "designation_fr",
        descending: bool = False,
    ) -> tuple[list[Structure], int]:
        stmt = self._filtered(criteria)

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )

        if sort_by == HIERARCHY_ORDER:
            # Roots first (no parent name), then grouped under their parent's name.
            parent = aliased(StructureModel)
            stmt = stmt.outerjoin(parent, parent.id == StructureModel.parent_id)
            columns = [func.coalesce(parent.designation_fr, ""), StructureModel.designation_fr]
        else:
            columns = [getattr(StructureModel, sort_by)]
        order = [c.desc() if descending else c.asc() for c in columns]
        result = await self._session.execute(
            stmt.order_by(*order, StructureModel.id).offset(skip).limit(limit)
        )
        return [self._to_domain(m) for m in result.scalars().all()], total or 0

    # ── Hierarchy ────────────────────────────────────────────────────

    async def find_children(self, parent_id: int) -> list[Structure]:
        result = await self._session.execute(
            select(StructureModel)
            .where(StructureModel.parent_id == parent_id)
            .order_by(StructureModel.designation_fr, StructureModel.id)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def find_roots(self) -> list[Structure]:
        result = await self._session.execute(
            select(StructureModel)
            .where(StructureModel.parent_id.is_(None))
            .order_by(StructureModel.designation_fr, StructureModel.id)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def count_direct_children(self, structure_id: int) -> int:
        return await self._count(StructureModel.parent_id == structure_id)

    # ── Counts & existence ───────────────────────────────────────────

    async def count_all(self) -> int:
        return await self._count()

    async def count_by_type(self, type_id: int) -> int:
        return await self._count(StructureModel.structure_type_id == type_id)

    async def count_roots(self) -> int:
        return await self._count(StructureModel.parent_id.is_(None))

    async def exists_by_id(self, structure_id: int) -> bool:
        return await self._exists(StructureModel.id == structure_id)

    async def exists_by_designation_fr(
        self, designation_fr: str, exclude_id: int | None = None
    ) -> bool:
        return await self._exists(
            StructureModel.designation_fr == designation_fr, exclude_id=exclude_id
        )

    async def exists_by_acronym_fr(
        self, acronym_fr: str, exclude_id: int | None = None
    ) -> bool:
        return await self._exists(
            StructureModel.acronym_fr == acronym_fr, exclude_id=exclude_id
        )

    # ── Write Operations ─────────────────────────────────────────────

    async def create(self, structure: Structure) -> Structure:
        model = StructureModel(
            designation_ar=structure.designation_ar,
            designation_en=structure.designation_en,
            designation_fr=structure.designation_fr,
            acronym_ar=structure.acronym_ar,
            acronym_en=structure.acronym_en,
            acronym_fr=structure.acronym_fr,
            structure_type_id=structure.structure_type_id,
            parent_id=structure.parent_id,
            created_at=structure.created_at,
            updated_at=structure.updated_at,
        )
        self._session.add(model)
        await self._flush(structure)
        structure.id = model.id
        return structure

    async def update(self, structure: Structure) -> Structure:
        model = await self._session.get(StructureModel, structure.id)
        if model is None:
            raise EntityNotFoundError("Structure", structure.id)

        model.designation_ar = structure.designation_ar
        model.designation_en = structure.designation_en
        model.designation_fr = structure.designation_fr
        model.acronym_ar = structure.acronym_ar
        model.acronym_en = structure.acronym_en
        model.acronym_fr = structure.acronym_fr
        model.structure_type_id = structure.structure_type_id
        model.parent_id = structure.parent_id
        model.updated_at = structure.updated_at
        await self._flush(structure)
        return structure

    async def delete(self, structure_id: int) -> bool:
        model = await self._session.get(StructureModel, structure_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Query building ───────────────────────────────────────────────

    def _filtered(self, criteria: StructureCriteria) -> Select:
        stmt = select(StructureModel)

        if criteria.structure_type_id is not None:
            stmt = stmt.where(StructureModel.structure_type_id == criteria.structure_type_id)
        if criteria.type_designation_fr is not None:
            stmt = stmt.where(
                StructureModel.structure_type_id.in_(
                    select(StructureTypeModel.id).where(
                        StructureTypeModel.designation_fr == criteria.type_designation_fr
                    )
                )
            )
        if criteria.parent_id is not None:
            stmt = stmt.where(StructureModel.parent_id == criteria.parent_id)
        if criteria.roots_only:
            stmt = stmt.where(StructureModel.parent_id.is_(None))

        if criteria.has_children is not None:
            child = aliased(StructureModel)
            has_child = select(child.id).where(child.parent_id == StructureModel.id).exists()
            stmt = stmt.where(has_child if criteria.has_children else ~has_child)

        if criteria.multilingual:
            stmt = stmt.where(designated_in_several_languages(StructureModel))

        if criteria.level is not None:
            stmt = stmt.where(StructureModel.id.in_(self._ids_at_level(criteria.level)))

        if criteria.search:
            q = f"%{criteria.search.lower()}%"
            conditions = [
                StructureModel.designation_fr.ilike(q),
                StructureModel.designation_en.ilike(q),
                StructureModel.designation_ar.ilike(q),
                StructureModel.acronym_fr.ilike(q),
                StructureModel.acronym_en.ilike(q),
                StructureModel.acronym_ar.ilike(q),
            ]
            if criteria.search_context:
                parent = aliased(StructureModel)
                stmt = stmt.outerjoin(
                    StructureTypeModel,
                    StructureTypeModel.id == StructureModel.structure_type_id,
                ).outerjoin(parent, parent.id == StructureModel.parent_id)
                conditions += [
                    StructureTypeModel.designation_fr.ilike(q),
                    parent.designation_fr.ilike(q),
                    parent.acronym_fr.ilike(q),
                ]
            stmt = stmt.where(or_(*conditions))

        return stmt

    @staticmethod
    def _ids_at_level(level: int) -> Select:
        """IDs of structures whose distance from their root equals ``level``."""
        levels = (
            select(StructureModel.id.label("id"), literal_column("0", Integer).label("depth"))
            .where(StructureModel.parent_id.is_(None))
            .cte("levels", recursive=True)
        )
        child = aliased(StructureModel)
        levels = levels.union_all(
            select(child.id, (levels.c.depth + 1).label("depth")).where(
                child.parent_id == levels.c.id,
                levels.c.depth < level,
            )
        )
        return select(levels.c.id).where(levels.c.depth == level)

    async def _first(self, condition) -> Structure | None:
        result = await self._session.execute(select(StructureModel).where(condition))
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def _count(self, *conditions) -> int:
        stmt = select(func.count()).select_from(StructureModel)
        if conditions:
            stmt = stmt.where(*conditions)
        return await self._session.scalar(stmt) or 0

    async def _exists(self, condition, exclude_id: int | None = None) -> bool:
        stmt = select(StructureModel.id).where(condition)
        if exclude_id is not None:
            stmt = stmt.where(StructureModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def _flush(self, structure: Structure) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            duplicate = duplicate_from_integrity_error(
                exc,
                "Structure",
                {
                    "designation_fr": structure.designation_fr,
                    "acronym_fr": structure.acronym_fr,
                },
            )
            if duplicate is None:
                raise
            raise duplicate from exc

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: StructureModel) -> Structure:
        return Structure(
            id=model.id,
            designation_ar=model.designation_ar,
            designation_en=model.designation_en,
            designation_fr=model.designation_fr,
            acronym_ar=model.acronym_ar,
            acronym_en=model.acronym_en,
            acronym_fr=model.acronym_fr,
            structure_type_id=model.structure_type_id,
            parent_id=model.parent_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
