"""SQLAlchemy ORM models for structure types and the structure hierarchy."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from orgstructure.infrastructure.database.base import Base


class StructureTypeModel(Base):
    """ORM model — maps to the 'structure_types' table."""

    __tablename__ = "structure_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    designation_ar: Mapped[str | None] = mapped_column(String(200), nullable=True)
    designation_en: Mapped[str | None] = mapped_column(String(200), nullable=True)
    designation_fr: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    acronym_ar: Mapped[str | None] = mapped_column(String(50), nullable=True)
    acronym_en: Mapped[str | None] = mapped_column(String(50), nullable=True)
    acronym_fr: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StructureTypeModel(id={self.id}, designation_fr='{self.designation_fr}')>"


class StructureModel(Base):
    """ORM model — maps to the 'structures' table.

    ``parent_id`` is a nullable self-referencing foreign key; deleting a row
    that is still referenced as a parent is restricted at the database level.
    """

    __tablename__ = "structures"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    designation_ar: Mapped[str | None] = mapped_column(String(200), nullable=True)
    designation_en: Mapped[str | None] = mapped_column(String(200), nullable=True)
    designation_fr: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    acronym_ar: Mapped[str | None] = mapped_column(String(50), nullable=True)
    acronym_en: Mapped[str | None] = mapped_column(String(50), nullable=True)
    acronym_fr: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    structure_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("structure_types.id", ondelete="RESTRICT"),
        nullable=False,
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("structures.id", ondelete="RESTRICT"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_structures_parent", "parent_id"),
        Index("ix_structures_type", "structure_type_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<StructureModel(id={self.id}, acronym_fr='{self.acronym_fr}', "
            f"parent_id={self.parent_id})>"
        )
