"""Liveness and readiness checks.

``/health`` never touches the database. ``/health/ready`` runs one query
through the regular service stack and answers 503 when it fails.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from orgstructure.application.services import StructureTypeService
from orgstructure.config import get_settings
from orgstructure.infrastructure.database.session import engine
from orgstructure.infrastructure.dependencies import get_structure_type_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check() -> dict:
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": engine.dialect.name,
        "hierarchy_max_depth": settings.hierarchy_max_depth,
    }


@router.get("/ready")
async def readiness_check(
    service: StructureTypeService = Depends(get_structure_type_service),
) -> dict:
    """Ready once the database answers and the type catalogue can be counted."""
    try:
        structure_types = await service.count_all()
    except SQLAlchemyError as e:
        logger.error("Readiness check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from e
    return {"status": "ready", "structure_types": structure_types}
