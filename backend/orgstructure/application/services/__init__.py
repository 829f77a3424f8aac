from .designation_validator import DesignationValidator
from .hierarchy_manager import HierarchyManager
from .structure_service import StructureService
from .structure_type_seeder import StructureTypeSeeder
from .structure_type_service import StructureTypeService

__all__ = [
    "DesignationValidator",
    "HierarchyManager",
    "StructureService",
    "StructureTypeSeeder",
    "StructureTypeService",
]
