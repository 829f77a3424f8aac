from .page import Page
from .structure import Structure
from .structure_type import StructureType

__all__ = [
    "Page",
    "Structure",
    "StructureType",
]
