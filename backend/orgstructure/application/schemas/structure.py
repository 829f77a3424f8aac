"""Pydantic DTOs (Data Transfer Objects) for the Structure feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StructureCreate(BaseModel):
    """Schema for creating a structure.

    French designation, French acronym and type are required by the domain;
    they are optional here so the service can report them as a
    ValidationError rather than a schema error.
    """

    designation_fr: str | None = Field(None, max_length=200, examples=["Direction des Transmissions"])
    designation_ar: str | None = Field(None, max_length=200)
    designation_en: str | None = Field(None, max_length=200, examples=["Signals Directorate"])
    acronym_fr: str | None = Field(None, max_length=50, examples=["DT"])
    acronym_ar: str | None = Field(None, max_length=50)
    acronym_en: str | None = Field(None, max_length=50)
    structure_type_id: int | None = Field(None, examples=[10])
    parent_id: int | None = Field(None, description="Parent structure; omit for a root")


class StructureUpdate(StructureCreate):
    """Schema for updating a structure — replaces every field.

    Sending ``parent_id: null`` detaches the structure and makes it a root.
    """


class StructureResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    designation_fr: str
    designation_ar: str | None
    designation_en: str | None
    acronym_fr: str
    acronym_ar: str | None
    acronym_en: str | None
    structure_type_id: int
    parent_id: int | None
    is_root: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StructureDetailResponse(StructureResponse):
    """Structure with its place in the hierarchy resolved."""

    designation: str | None = Field(None, description="Designation in the requested language")
    acronym: str | None = Field(None, description="Acronym in the requested language")
    display_text: str
    available_languages: list[str]
    depth: int
    children_count: int
    position: str
    ancestors: list[StructureResponse]


class StructureTreeNode(BaseModel):
    """Recursive node of the hierarchy tree."""

    id: int
    designation_fr: str
    acronym_fr: str
    structure_type_id: int
    children: list[StructureTreeNode] = []


StructureTreeNode.model_rebuild()
