"""Structure type CRUD and lookup endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from orgstructure.application.schemas import (
    PageResponse,
    StructureTypeCreate,
    StructureTypeResponse,
    StructureTypeUpdate,
)
from orgstructure.application.services import StructureTypeService
from orgstructure.config import get_settings
from orgstructure.domain.entities import Page
from orgstructure.domain.exceptions import DomainError
from orgstructure.infrastructure.dependencies import get_structure_type_service
from orgstructure.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/structure-types", tags=["Structure Types"])

_settings = get_settings()


def _to_page(page: Page) -> PageResponse[StructureTypeResponse]:
    return PageResponse[StructureTypeResponse](
        items=[StructureTypeResponse.model_validate(t, from_attributes=True) for t in page.items],
        total=page.total,
        page=page.page,
        size=page.size,
        pages=page.pages,
    )


@router.get("", response_model=PageResponse[StructureTypeResponse])
async def list_structure_types(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureTypeService = Depends(get_structure_type_service),
) -> PageResponse[StructureTypeResponse]:
    """Retrieve a paginated list of structure types."""
    try:
        result = await service.list_structure_types(
            page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
        )
    except DomainError as e:
        raise to_http_exception(e)
    return _to_page(result)


@router.get("/search", response_model=PageResponse[StructureTypeResponse])
async def search_structure_types(
    query: str | None = Query(None, description="Substring of any designation or acronym"),
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureTypeService = Depends(get_structure_type_service),
) -> PageResponse[StructureTypeResponse]:
    """Case-insensitive search; a blank query returns every structure type."""
    try:
        result = await service.search(
            query, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
        )
    except DomainError as e:
        raise to_http_exception(e)
    return _to_page(result)


@router.get("/multilingual", response_model=PageResponse[StructureTypeResponse])
async def list_multilingual_structure_types(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureTypeService = Depends(get_structure_type_service),
) -> PageResponse[StructureTypeResponse]:
    """Structure types designated in at least two languages."""
    try:
        result = await service.find_multilingual(
            page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
        )
    except DomainError as e:
        raise to_http_exception(e)
    return _to_page(result)


@router.get("/count", response_model=int)
async def count_structure_types(
    service: StructureTypeService = Depends(get_structure_type_service),
) -> int:
    return await service.count_all()


@router.get("/designation-fr/{designation_fr}", response_model=StructureTypeResponse)
async def get_structure_type_by_designation_fr(
    designation_fr: str,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> StructureTypeResponse:
    structure_type = await service.find_by_designation_fr(designation_fr)
    if structure_type is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"StructureType with designation_fr '{designation_fr}' not found",
        )
    return StructureTypeResponse.model_validate(structure_type, from_attributes=True)


@router.get("/designation-ar/{designation_ar}", response_model=StructureTypeResponse)
async def get_structure_type_by_designation_ar(
    designation_ar: str,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> StructureTypeResponse:
    structure_type = await service.find_by_designation_ar(designation_ar)
    if structure_type is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"StructureType with designation_ar '{designation_ar}' not found",
        )
    return StructureTypeResponse.model_validate(structure_type, from_attributes=True)


@router.get("/designation-en/{designation_en}", response_model=StructureTypeResponse)
async def get_structure_type_by_designation_en(
    designation_en: str,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> StructureTypeResponse:
    structure_type = await service.find_by_designation_en(designation_en)
    if structure_type is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"StructureType with designation_en '{designation_en}' not found",
        )
    return StructureTypeResponse.model_validate(structure_type, from_attributes=True)


@router.get("/exists/designation-fr/{designation_fr}", response_model=bool)
async def structure_type_designation_fr_exists(
    designation_fr: str,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> bool:
    return await service.exists_by_designation_fr(designation_fr)


@router.get("/{type_id}", response_model=StructureTypeResponse)
async def get_structure_type(
    type_id: int,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> StructureTypeResponse:
    """Retrieve a single structure type by ID."""
    try:
        structure_type = await service.get_structure_type(type_id)
    except DomainError as e:
        raise to_http_exception(e)
    return StructureTypeResponse.model_validate(structure_type, from_attributes=True)


@router.get("/{type_id}/exists", response_model=bool)
async def structure_type_exists(
    type_id: int,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> bool:
    return await service.exists_by_id(type_id)


@router.post("", response_model=StructureTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_structure_type(
    data: StructureTypeCreate,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> StructureTypeResponse:
    """Create a new structure type."""
    try:
        structure_type = await service.create_structure_type(data)
    except DomainError as e:
        raise to_http_exception(e)
    return StructureTypeResponse.model_validate(structure_type, from_attributes=True)


@router.put("/{type_id}", response_model=StructureTypeResponse)
async def update_structure_type(
    type_id: int,
    data: StructureTypeUpdate,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> StructureTypeResponse:
    """Replace every field of an existing structure type."""
    try:
        structure_type = await service.update_structure_type(type_id, data)
    except DomainError as e:
        raise to_http_exception(e)
    return StructureTypeResponse.model_validate(structure_type, from_attributes=True)


@router.delete("/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_structure_type(
    type_id: int,
    service: StructureTypeService = Depends(get_structure_type_service),
) -> None:
    """Delete a structure type that no structure references."""
    try:
        await service.delete_structure_type(type_id)
    except DomainError as e:
        raise to_http_exception(e)
