from .structure_repository import (
    HIERARCHY_ORDER,
    STRUCTURE_SORT_FIELDS,
    StructureCriteria,
    StructureRepository,
)
from .structure_type_repository import (
    STRUCTURE_TYPE_SORT_FIELDS,
    StructureTypeRepository,
)

__all__ = [
    "HIERARCHY_ORDER",
    "STRUCTURE_SORT_FIELDS",
    "StructureCriteria",
    "StructureRepository",
    "STRUCTURE_TYPE_SORT_FIELDS",
    "StructureTypeRepository",
]
