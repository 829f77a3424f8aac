"""Domain entity — a node of the organizational hierarchy."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Structure:
    """An organizational unit (directorate, brigade, battalion, ...).

    ``parent_id`` is a weak reference to another Structure; ``None`` marks a
    hierarchy root. ``structure_type_id`` references a StructureType.
    """

    designation_fr: str
    acronym_fr: str
    structure_type_id: int
    designation_ar: str | None = None
    designation_en: str | None = None
    acronym_ar: str | None = None
    acronym_en: str | None = None
    parent_id: int | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def update(
        self,
        *,
        designation_fr: str,
        acronym_fr: str,
        structure_type_id: int,
        parent_id: int | None,
        designation_ar: str | None = None,
        designation_en: str | None = None,
        acronym_ar: str | None = None,
        acronym_en: str | None = None,
    ) -> None:
        """Replace every mutable field (full update) and refresh updated_at."""
        self.designation_fr = designation_fr
        self.designation_ar = designation_ar
        self.designation_en = designation_en
        self.acronym_fr = acronym_fr
        self.acronym_ar = acronym_ar
        self.acronym_en = acronym_en
        self.structure_type_id = structure_type_id
        self.parent_id = parent_id
        self.updated_at = datetime.now(timezone.utc)
