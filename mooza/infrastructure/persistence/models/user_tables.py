"""
SQLModel table definitions for searchable users.

Field and profession live on the user; the remaining facets live on the
user's single search profile.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String, Text
from sqlmodel import Field, SQLModel


class UserTable(SQLModel, table=True):
    """Musician account as seen by search."""

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_name", "first_name", "last_name"),
        Index("idx_users_field", "field_of_activity_id"),
        Index("idx_users_profession", "profession_id"),
    )

    id: str = Field(primary_key=True, max_length=64)
    first_name: str = Field(sa_column=Column(String(100), nullable=False))
    last_name: str = Field(sa_column=Column(String(100), nullable=False))
    nickname: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    avatar: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))
    city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    bio: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    field_of_activity_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("fields_of_activity.id", ondelete="SET NULL"), nullable=True),
    )
    profession_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("professions.id", ondelete="SET NULL"), nullable=True),
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class SearchProfileTable(SQLModel, table=True):
    """What a musician offers: service, genre, terms and prices."""

    __tablename__ = "search_profiles"
    __table_args__ = (
        Index("idx_search_profiles_service_genre", "service_id", "genre_id"),
    )

    id: str = Field(primary_key=True, max_length=64)
    user_id: str = Field(
        sa_column=Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    )
    service_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("services.id", ondelete="SET NULL"), nullable=True),
    )
    genre_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("genres.id", ondelete="SET NULL"), nullable=True),
    )
    work_format_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("work_formats.id", ondelete="SET NULL"), nullable=True),
    )
    employment_type_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("employment_types.id", ondelete="SET NULL"), nullable=True),
    )
    skill_level_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("skill_levels.id", ondelete="SET NULL"), nullable=True),
    )
    availability_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("availabilities.id", ondelete="SET NULL"), nullable=True),
    )
    price_per_hour: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    price_per_event: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


__all__ = ["UserTable", "SearchProfileTable"]
