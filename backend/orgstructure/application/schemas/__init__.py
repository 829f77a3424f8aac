from .common import PageResponse
from .structure import (
    StructureCreate,
    StructureDetailResponse,
    StructureResponse,
    StructureTreeNode,
    StructureUpdate,
)
from .structure_type import (
    StructureTypeCreate,
    StructureTypeResponse,
    StructureTypeUpdate,
)

__all__ = [
    "PageResponse",
    "StructureCreate",
    "StructureDetailResponse",
    "StructureResponse",
    "StructureTreeNode",
    "StructureUpdate",
    "StructureTypeCreate",
    "StructureTypeResponse",
    "StructureTypeUpdate",
]
