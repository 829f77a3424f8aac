"""SQLAlchemy implementation of the StructureTypeRepository."""

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orgstructure.application.interfaces import StructureTypeRepository
from orgstructure.domain.entities import StructureType
from orgstructure.domain.exceptions import EntityNotFoundError
from orgstructure.infrastructure.database.models import StructureTypeModel
from orgstructure.infrastructure.database.repositories.expressions import (
    designated_in_several_languages,
)
from orgstructure.infrastructure.database.repositories.integrity import (
    duplicate_from_integrity_error,
)


class SQLAlchemyStructureTypeRepository(StructureTypeRepository):
    """Concrete structure type repository backed by SQLite/PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Read Operations ──────────────────────────────────────────────

    async def get_by_id(self, type_id: int) -> StructureType | None:
        model = await self._session.get(StructureTypeModel, type_id)
        return self._to_domain(model) if model else None

    async def get_by_designation_fr(self, designation_fr: str) -> StructureType | None:
        return await self._first(StructureTypeModel.designation_fr == designation_fr)

    async def get_by_designation_ar(self, designation_ar: str) -> StructureType | None:
        return await self._first(StructureTypeModel.designation_ar == designation_ar)

    async def get_by_designation_en(self, designation_en: str) -> StructureType | None:
        return await self._first(StructureTypeModel.designation_en == designation_en)

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
        stmt = select(StructureTypeModel)
        if search:
            q = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    StructureTypeModel.designation_fr.ilike(q),
                    StructureTypeModel.designation_en.ilike(q),
                    StructureTypeModel.designation_ar.ilike(q),
                    StructureTypeModel.acronym_fr.ilike(q),
                    StructureTypeModel.acronym_en.ilike(q),
                    StructureTypeModel.acronym_ar.ilike(q),
                )
            )
        if multilingual:
            stmt = stmt.where(designated_in_several_languages(StructureTypeModel))

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )

        column = getattr(StructureTypeModel, sort_by)
        order = column.desc() if descending else column.asc()
        result = await self._session.execute(
            stmt.order_by(order, StructureTypeModel.id).offset(skip).limit(limit)
        )
        return [self._to_domain(m) for m in result.scalars().all()], total or 0

    async def count_all(self) -> int:
        return await self._session.scalar(
            select(func.count()).select_from(StructureTypeModel)
        ) or 0

    async def exists_by_id(self, type_id: int) -> bool:
        result = await self._session.execute(
            select(StructureTypeModel.id).where(StructureTypeModel.id == type_id)
        )
        return result.scalar_one_or_none() is not None

    async def exists_by_designation_fr(
        self, designation_fr: str, exclude_id: int | None = None
    ) -> bool:
        stmt = select(StructureTypeModel.id).where(
            StructureTypeModel.designation_fr == designation_fr
        )
        if exclude_id is not None:
            stmt = stmt.where(StructureTypeModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    # ── Write Operations ─────────────────────────────────────────────

    async def create(self, structure_type: StructureType) -> StructureType:
        model = StructureTypeModel(
            designation_ar=structure_type.designation_ar,
            designation_en=structure_type.designation_en,
            designation_fr=structure_type.designation_fr,
            acronym_ar=structure_type.acronym_ar,
            acronym_en=structure_type.acronym_en,
            acronym_fr=structure_type.acronym_fr,
            created_at=structure_type.created_at,
            updated_at=structure_type.updated_at,
        )
        self._session.add(model)
        await self._flush(structure_type)
        structure_type.id = model.id
        return structure_type

    async def update(self, structure_type: StructureType) -> StructureType:
        model = await self._session.get(StructureTypeModel, structure_type.id)
        if model is None:
            raise EntityNotFoundError("StructureType", structure_type.id)

        model.designation_ar = structure_type.designation_ar
        model.designation_en = structure_type.designation_en
        model.designation_fr = structure_type.designation_fr
        model.acronym_ar = structure_type.acronym_ar
        model.acronym_en = structure_type.acronym_en
        model.acronym_fr = structure_type.acronym_fr
        model.updated_at = structure_type.updated_at
        await self._flush(structure_type)
        return structure_type

    async def delete(self, type_id: int) -> bool:
        model = await self._session.get(StructureTypeModel, type_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _first(self, condition) -> StructureType | None:
        result = await self._session.execute(
            select(StructureTypeModel)
            .where(condition)
            .order_by(StructureTypeModel.id)
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def _flush(self, structure_type: StructureType) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            duplicate = duplicate_from_integrity_error(
                exc, "StructureType", {"designation_fr": structure_type.designation_fr}
            )
            if duplicate is None:
                raise
            raise duplicate from exc

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: StructureTypeModel) -> StructureType:
        return StructureType(
            id=model.id,
            designation_ar=model.designation_ar,
            designation_en=model.designation_en,
            designation_fr=model.designation_fr,
            acronym_ar=model.acronym_ar,
            acronym_en=model.acronym_en,
            acronym_fr=model.acronym_fr,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
