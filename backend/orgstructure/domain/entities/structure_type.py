"""Domain entity — classification tag attached to organizational structures."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class StructureType:
    """A kind of structure, e.g. "Direction Centrale" or "Régiment".

    French designation is the canonical, unique name. The type is referenced
    by structures but never owns them.
    """

    designation_fr: str
    designation_ar: str | None = None
    designation_en: str | None = None
    acronym_ar: str | None = None
    acronym_en: str | None = None
    acronym_fr: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        designation_fr: str,
        designation_ar: str | None = None,
        designation_en: str | None = None,
        acronym_ar: str | None = None,
        acronym_en: str | None = None,
        acronym_fr: str | None = None,
    ) -> None:
        """Replace all designations and acronyms and refresh updated_at."""
        self.designation_fr = designation_fr
        self.designation_ar = designation_ar
        self.designation_en = designation_en
        self.acronym_ar = acronym_ar
        self.acronym_en = acronym_en
        self.acronym_fr = acronym_fr
        self.updated_at = datetime.now(timezone.utc)
