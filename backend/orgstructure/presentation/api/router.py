"""API router — mounts every endpoint group under ``/api/v1``.

    /api/v1/health            liveness and readiness
    /api/v1/structure-types   type catalogue CRUD and lookups
    /api/v1/structures        structure CRUD, listings and hierarchy queries
"""

from fastapi import APIRouter

from orgstructure.presentation.api.v1.endpoints import health, structure_types, structures

API_VERSION = "v1"

_ENDPOINT_GROUPS = (health.router, structure_types.router, structures.router)

v1_router = APIRouter(prefix=f"/{API_VERSION}")
for group in _ENDPOINT_GROUPS:
    v1_router.include_router(group)

router = APIRouter(prefix="/api")
router.include_router(v1_router)
