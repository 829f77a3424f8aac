"""Structure CRUD, hierarchy and lookup endpoints.

Literal routes (``/roots``, ``/count``, ``/tree``, ...) are declared before
``/{structure_id}`` so they are matched first.
"""

from collections.abc import Awaitable

from fastapi import APIRouter, Depends, HTTPException, Query, status

from orgstructure.application.interfaces import StructureCriteria
from orgstructure.application.schemas import (
    PageResponse,
    StructureCreate,
    StructureDetailResponse,
    StructureResponse,
    StructureTreeNode,
    StructureUpdate,
)
from orgstructure.application.services import HierarchyManager, StructureService
from orgstructure.config import get_settings
from orgstructure.domain.entities import Page, Structure
from orgstructure.domain.exceptions import DomainError
from orgstructure.domain.hierarchy import classify_position
from orgstructure.domain.multilingual import (
    acronym_for,
    available_languages,
    designation_for,
    display_text,
)
from orgstructure.infrastructure.dependencies import (
    get_hierarchy_manager,
    get_structure_service,
)
from orgstructure.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/structures", tags=["Structures"])

_settings = get_settings()


# ── Helpers ──────────────────────────────────────────────────────────

def _to_response(structure: Structure) -> StructureResponse:
    return StructureResponse.model_validate(structure, from_attributes=True)


def _to_list(structures: list[Structure]) -> list[StructureResponse]:
    return [_to_response(s) for s in structures]


def _to_page(page: Page) -> PageResponse[StructureResponse]:
    return PageResponse[StructureResponse](
        items=_to_list(page.items),
        total=page.total,
        page=page.page,
        size=page.size,
        pages=page.pages,
    )


async def _to_detail(
    structure: Structure,
    service: StructureService,
    hierarchy: HierarchyManager,
    language: str | None = None,
) -> StructureDetailResponse:
    """Resolve the structure's place in the hierarchy."""
    ancestors = await hierarchy.get_ancestors(structure.id)
    children_count = await service.count_direct_children(structure.id)
    depth = len(ancestors)
    return StructureDetailResponse(
        **_to_response(structure).model_dump(),
        designation=designation_for(structure, language),
        acronym=acronym_for(structure, language),
        display_text=display_text(structure),
        available_languages=available_languages(structure),
        depth=depth,
        children_count=children_count,
        position=classify_position(depth, children_count > 0).value,
        ancestors=_to_list(ancestors),
    )


async def _paged(call: Awaitable[Page]) -> PageResponse[StructureResponse]:
    try:
        result = await call
    except DomainError as e:
        raise to_http_exception(e)
    return _to_page(result)


def _not_found(field: str, value: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Structure with {field} '{value}' not found",
    )


# ── Listings ─────────────────────────────────────────────────────────

@router.get("", response_model=PageResponse[StructureResponse])
async def list_structures(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Retrieve a paginated list of structures, ascending by French designation by default."""
    return await _paged(
        service.list_structures(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )


@router.get("/type/{type_id}", response_model=PageResponse[StructureResponse])
async def list_structures_by_type(
    type_id: int,
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    return await _paged(
        service.find_by_type(type_id, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )


@router.get("/type-designation/{type_designation}", response_model=PageResponse[StructureResponse])
async def list_structures_by_type_designation(
    type_designation: str,
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Structures whose type has exactly this French designation."""
    return await _paged(
        service.find_by_type_designation(
            type_designation, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
        )
    )


@router.get("/ordered-by-hierarchy", response_model=PageResponse[StructureResponse])
async def list_structures_ordered_by_hierarchy(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Roots first, then structures grouped under their parent's French designation."""
    return await _paged(service.list_by_hierarchy(page=page, size=size))


@router.get("/parent/{parent_id}", response_model=PageResponse[StructureResponse])
async def list_children(
    parent_id: int,
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Direct children of a structure."""
    return await _paged(
        service.list_structures(
            StructureCriteria(parent_id=parent_id),
            page=page,
            size=size,
            sort_by=sort_by,
            sort_dir=sort_dir,
        )
    )


@router.get("/roots", response_model=PageResponse[StructureResponse])
async def list_roots(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    return await _paged(
        service.list_structures(
            StructureCriteria(roots_only=True),
            page=page,
            size=size,
            sort_by=sort_by,
            sort_dir=sort_dir,
        )
    )


@router.get("/with-children", response_model=PageResponse[StructureResponse])
async def list_structures_with_children(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    return await _paged(
        service.find_with_children(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )


@router.get("/leaves", response_model=PageResponse[StructureResponse])
async def list_leaves(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    return await _paged(
        service.find_leaves(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )


@router.get("/level/{level}", response_model=PageResponse[StructureResponse])
async def list_structures_by_level(
    level: int,
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Structures at a given hierarchy depth (0 = roots)."""
    return await _paged(service.find_by_level(level, page=page, size=size))


@router.get("/multilingual", response_model=PageResponse[StructureResponse])
async def list_multilingual_structures(
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Structures designated in at least two languages."""
    return await _paged(
        service.find_multilingual(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )


@router.get("/search", response_model=PageResponse[StructureResponse])
async def search_structures(
    query: str | None = Query(None, description="Substring of any designation or acronym"),
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    """Case-insensitive search; a blank query returns every structure."""
    return await _paged(
        service.search(query, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
    )


@router.get("/search/context", response_model=PageResponse[StructureResponse])
async def search_structures_with_context(
    query: str | None = Query(None, description="Also matched against type and parent"),
    page: int = Query(0, ge=0),
    size: int = Query(_settings.default_page_size, ge=1, le=_settings.max_page_size),
    sort_by: str = Query("designation_fr"),
    sort_dir: str = Query("asc"),
    service: StructureService = Depends(get_structure_service),
) -> PageResponse[StructureResponse]:
    return await _paged(
        service.search_with_context(
            query, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
        )
    )


@router.get("/tree", response_model=list[StructureTreeNode])
async def get_structure_tree(
    root_id: int | None = Query(None, description="Limit the tree to this subtree"),
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> list[StructureTreeNode]:
    """Full hierarchy (or one subtree) as nested nodes."""
    try:
        tree = await hierarchy.get_tree(root_id)
    except DomainError as e:
        raise to_http_exception(e)
    return [StructureTreeNode.model_validate(node) for node in tree]


# ── Counts & existence ───────────────────────────────────────────────

@router.get("/count", response_model=int)
async def count_structures(
    service: StructureService = Depends(get_structure_service),
) -> int:
    return await service.count_all()


@router.get("/count/type/{type_id}", response_model=int)
async def count_structures_by_type(
    type_id: int,
    service: StructureService = Depends(get_structure_service),
) -> int:
    return await service.count_by_type(type_id)


@router.get("/count/roots", response_model=int)
async def count_roots(
    service: StructureService = Depends(get_structure_service),
) -> int:
    return await service.count_roots()


@router.get("/exists/designation-fr/{designation_fr}", response_model=bool)
async def designation_fr_exists(
    designation_fr: str,
    service: StructureService = Depends(get_structure_service),
) -> bool:
    return await service.exists_by_designation_fr(designation_fr)


@router.get("/exists/acronym-fr/{acronym_fr}", response_model=bool)
async def acronym_fr_exists(
    acronym_fr: str,
    service: StructureService = Depends(get_structure_service),
) -> bool:
    return await service.exists_by_acronym_fr(acronym_fr)


# ── Lookups by natural key ───────────────────────────────────────────

@router.get("/designation-fr/{designation_fr}", response_model=StructureResponse)
async def get_structure_by_designation_fr(
    designation_fr: str,
    service: StructureService = Depends(get_structure_service),
) -> StructureResponse:
    structure = await service.find_by_designation_fr(designation_fr)
    if structure is None:
        raise _not_found("designation_fr", designation_fr)
    return _to_response(structure)


@router.get("/acronym-fr/{acronym_fr}", response_model=StructureResponse)
async def get_structure_by_acronym_fr(
    acronym_fr: str,
    service: StructureService = Depends(get_structure_service),
) -> StructureResponse:
    structure = await service.find_by_acronym_fr(acronym_fr)
    if structure is None:
        raise _not_found("acronym_fr", acronym_fr)
    return _to_response(structure)


# ── Single structure ─────────────────────────────────────────────────

@router.get("/{structure_id}", response_model=StructureDetailResponse)
async def get_structure(
    structure_id: int,
    lang: str | None = Query(None, description="ar, en or fr; falls back to French"),
    service: StructureService = Depends(get_structure_service),
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> StructureDetailResponse:
    """Retrieve a structure with its ancestors, depth and position."""
    try:
        structure = await service.get_structure(structure_id)
        return await _to_detail(structure, service, hierarchy, lang)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{structure_id}/exists", response_model=bool)
async def structure_exists(
    structure_id: int,
    service: StructureService = Depends(get_structure_service),
) -> bool:
    return await service.exists_by_id(structure_id)


@router.get("/{structure_id}/children-count", response_model=int)
async def count_children(
    structure_id: int,
    service: StructureService = Depends(get_structure_service),
) -> int:
    return await service.count_direct_children(structure_id)


@router.get("/{structure_id}/potential-parents", response_model=list[StructureResponse])
async def list_potential_parents(
    structure_id: int,
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> list[StructureResponse]:
    """Every structure that can become the parent without creating a cycle."""
    try:
        return _to_list(await hierarchy.find_potential_parents(structure_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{structure_id}/ancestors", response_model=list[StructureResponse])
async def list_ancestors(
    structure_id: int,
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> list[StructureResponse]:
    """Parent chain, root first."""
    try:
        return _to_list(await hierarchy.get_ancestors(structure_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{structure_id}/descendants", response_model=list[StructureResponse])
async def list_descendants(
    structure_id: int,
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> list[StructureResponse]:
    """All transitive children, level by level."""
    try:
        return _to_list(await hierarchy.get_descendants(structure_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{structure_id}/siblings", response_model=list[StructureResponse])
async def list_siblings(
    structure_id: int,
    service: StructureService = Depends(get_structure_service),
) -> list[StructureResponse]:
    try:
        return _to_list(await service.find_siblings(structure_id))
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{ancestor_id}/is-ancestor-of/{descendant_id}", response_model=bool)
async def is_ancestor_of(
    ancestor_id: int,
    descendant_id: int,
    hierarchy: HierarchyManager = Depends(get_hierarchy_manager),
) -> bool:
    return await hierarchy.is_ancestor_of(ancestor_id, descendant_id)


# ── Mutations ────────────────────────────────────────────────────────

@router.post("", response_model=StructureResponse, status_code=status.HTTP_201_CREATED)
async def create_structure(
    data: StructureCreate,
    service: StructureService = Depends(get_structure_service),
) -> StructureResponse:
    """Create a structure, optionally under an existing parent."""
    try:
        structure = await service.create_structure(data)
    except DomainError as e:
        raise to_http_exception(e)
    return _to_response(structure)


@router.put("/{structure_id}", response_model=StructureResponse)
async def update_structure(
    structure_id: int,
    data: StructureUpdate,
    service: StructureService = Depends(get_structure_service),
) -> StructureResponse:
    """Replace every field; ``parent_id: null`` makes the structure a root."""
    try:
        structure = await service.update_structure(structure_id, data)
    except DomainError as e:
        raise to_http_exception(e)
    return _to_response(structure)


@router.delete("/{structure_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_structure(
    structure_id: int,
    service: StructureService = Depends(get_structure_service),
) -> None:
    """Delete a structure that has no children."""
    try:
        await service.delete_structure(structure_id)
    except DomainError as e:
        raise to_http_exception(e)
