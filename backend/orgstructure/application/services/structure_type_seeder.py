"""Structure type seeder — loads the reference catalogue from YAML at startup."""

import logging
from pathlib import Path

import yaml

from orgstructure.application.interfaces import StructureTypeRepository
from orgstructure.domain.entities import StructureType

logger = logging.getLogger(__name__)


class StructureTypeSeeder:
    """Inserts catalogue entries whose French designation is not yet stored.

    Idempotent: safe to run on every startup. Existing rows, including ones
    edited through the API, are left untouched.
    """

    def __init__(self, repository: StructureTypeRepository, seed_file: str):
        self._repo = repository
        self._seed_file = Path(seed_file)

    async def seed(self) -> int:
        """Returns the number of structure types inserted."""
        if not self._seed_file.exists():
            logger.warning("Structure type seed file not found: %s", self._seed_file)
            return 0

        raw = yaml.safe_load(self._seed_file.read_text("utf-8")) or {}
        entries = raw.get("structure_types", [])

        inserted = 0
        for entry in entries:
            designation_fr = entry.get("designation_fr")
            if not designation_fr:
                logger.warning("Skipping structure type seed entry without designation_fr: %s", entry)
                continue
            if await self._repo.exists_by_designation_fr(designation_fr):
                continue
            await self._repo.create(
                StructureType(
                    designation_fr=designation_fr,
                    designation_ar=entry.get("designation_ar"),
                    designation_en=entry.get("designation_en"),
                    acronym_fr=entry.get("acronym_fr"),
                    acronym_ar=entry.get("acronym_ar"),
                    acronym_en=entry.get("acronym_en"),
                )
            )
            inserted += 1

        logger.info(
            "Structure type catalogue: %d entries, %d inserted", len(entries), inserted
        )
        return inserted
