from .structure_models import StructureModel, StructureTypeModel

__all__ = [
    "StructureModel",
    "StructureTypeModel",
]
