"""Pydantic DTOs (Data Transfer Objects) for the StructureType feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class StructureTypeCreate(BaseModel):
    """Schema for creating a structure type.

    ``designation_fr`` is required by the domain; a missing or blank value is
    rejected by the service with a ValidationError.
    """

    designation_fr: str | None = Field(None, max_length=200, examples=["Direction Centrale"])
    designation_ar: str | None = Field(None, max_length=200, examples=["مديرية مركزية"])
    designation_en: str | None = Field(None, max_length=200, examples=["Central Directorate"])
    acronym_fr: str | None = Field(None, max_length=50)
    acronym_ar: str | None = Field(None, max_length=50)
    acronym_en: str | None = Field(None, max_length=50)


class StructureTypeUpdate(StructureTypeCreate):
    """Schema for updating a structure type — replaces every field."""


class StructureTypeResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    designation_fr: str
    designation_ar: str | None
    designation_en: str | None
    acronym_fr: str | None
    acronym_ar: str | None
    acronym_en: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
