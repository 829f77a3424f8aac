"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orgstructure.config import get_settings
from orgstructure.application.services import (
    HierarchyManager,
    StructureService,
    StructureTypeService,
)
from orgstructure.infrastructure.database.session import get_db_session
from orgstructure.infrastructure.database.repositories import (
    SQLAlchemyStructureRepository,
    SQLAlchemyStructureTypeRepository,
)


async def get_hierarchy_manager(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[HierarchyManager, None]:
    """Provides a HierarchyManager bounded by the configured maximum depth."""
    settings = get_settings()
    repository = SQLAlchemyStructureRepository(session)
    yield HierarchyManager(repository, max_depth=settings.hierarchy_max_depth)


async def get_structure_type_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[StructureTypeService, None]:
    """Provides a StructureTypeService with its repositories wired up."""
    yield StructureTypeService(
        SQLAlchemyStructureTypeRepository(session),
        SQLAlchemyStructureRepository(session),
    )


async def get_structure_service(
    session: AsyncSession = Depends(get_db_session),
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> AsyncGenerator[StructureService, None]:
    """Provides a StructureService sharing the request's session with its HierarchyManager."""
    yield StructureService(
        SQLAlchemyStructureRepository(session),
        SQLAlchemyStructureTypeRepository(session),
        hierarchy,
    )
