"""
SQLModel table definitions for the reference catalog.

Each facet has its own table. Scoped facets carry a foreign key to their
parent facet; flat facets stand alone. Rows are seeded by administrators.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, Index, String
from sqlmodel import Field, SQLModel


class ReferenceOptionBase(SQLModel):
    """Columns shared by every reference table."""

    id: str = Field(primary_key=True, max_length=64, description="Stable option identifier")
    name: str = Field(max_length=200, description="Display name")
    name_en: Optional[str] = Field(default=None, max_length=200, description="English display name")
    sort_order: int = Field(default=0, description="Explicit display position")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )


class FieldOfActivityTable(ReferenceOptionBase, table=True):
    __tablename__ = "fields_of_activity"


class ProfessionTable(ReferenceOptionBase, table=True):
    __tablename__ = "professions"
    __table_args__ = (
        Index("idx_professions_field", "field_of_activity_id"),
    )

    field_of_activity_id: str = Field(
        sa_column=Column(String(64), ForeignKey("fields_of_activity.id", ondelete="CASCADE"), nullable=False),
        description="Owning field of activity"
    )


class ServiceTable(ReferenceOptionBase, table=True):
    __tablename__ = "services"
    __table_args__ = (
        Index("idx_services_profession", "profession_id"),
    )

    profession_id: str = Field(
        sa_column=Column(String(64), ForeignKey("professions.id", ondelete="CASCADE"), nullable=False),
        description="Owning profession"
    )


class GenreTable(ReferenceOptionBase, table=True):
    __tablename__ = "genres"
    __table_args__ = (
        Index("idx_genres_service", "service_id"),
    )

    service_id: str = Field(
        sa_column=Column(String(64), ForeignKey("services.id", ondelete="CASCADE"), nullable=False),
        description="Owning service"
    )


class WorkFormatTable(ReferenceOptionBase, table=True):
    __tablename__ = "work_formats"


class EmploymentTypeTable(ReferenceOptionBase, table=True):
    __tablename__ = "employment_types"


class SkillLevelTable(ReferenceOptionBase, table=True):
    __tablename__ = "skill_levels"


class AvailabilityTable(ReferenceOptionBase, table=True):
    __tablename__ = "availabilities"


__all__ = [
    "ReferenceOptionBase",
    "FieldOfActivityTable",
    "ProfessionTable",
    "ServiceTable",
    "GenreTable",
    "WorkFormatTable",
    "EmploymentTypeTable",
    "SkillLevelTable",
    "AvailabilityTable",
]
