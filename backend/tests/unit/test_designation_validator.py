"""Unit tests for the shared DesignationValidator."""

import pytest

from orgstructure.application.services import DesignationValidator
from orgstructure.domain.exceptions import DuplicateEntityError, ValidationError


def test_require_accepts_value():
    DesignationValidator("Rank").require("Colonel", "designation_fr", "create")
    DesignationValidator("Rank").require(0, "level", "create")


@pytest.mark.parametrize("value", [None, "", "  \t"])
def test_require_rejects_missing(value):
    with pytest.raises(ValidationError) as exc_info:
        DesignationValidator("Rank").require(value, "designation_fr", "update")
    assert str(exc_info.value) == "Rank designation_fr is required for update"


@pytest.mark.asyncio
async def test_ensure_unique_passes_exclude_id():
    calls = []

    async def exists(value, exclude_id):
        calls.append((value, exclude_id))
        return False

    await DesignationValidator("Rank").ensure_unique("designation_fr", "Colonel", exists, 7)
    assert calls == [("Colonel", 7)]


@pytest.mark.asyncio
async def test_ensure_unique_raises_duplicate():
    async def exists(value, exclude_id):
        return True

    with pytest.raises(DuplicateEntityError) as exc_info:
        await DesignationValidator("Rank").ensure_unique("acronym_fr", "COL", exists)
    assert exc_info.value.entity_type == "Rank"
    assert exc_info.value.field == "acronym_fr"
