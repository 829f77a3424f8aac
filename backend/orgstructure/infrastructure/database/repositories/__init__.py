from .structure_repository import SQLAlchemyStructureRepository
from .structure_type_repository import SQLAlchemyStructureTypeRepository

__all__ = [
    "SQLAlchemyStructureRepository",
    "SQLAlchemyStructureTypeRepository",
]
