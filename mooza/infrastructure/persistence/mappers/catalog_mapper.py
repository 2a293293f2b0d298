"""
Mappers between persistence rows and search domain entities.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Type

from mooza.domain.entities.facet import FacetId, Option
from mooza.domain.entities.search import UserRow
from mooza.infrastructure.persistence.models.reference_tables import (
    AvailabilityTable,
    EmploymentTypeTable,
    FieldOfActivityTable,
    GenreTable,
    ProfessionTable,
    ReferenceOptionBase,
    ServiceTable,
    SkillLevelTable,
    WorkFormatTable,
)
from mooza.infrastructure.persistence.models.user_tables import SearchProfileTable, UserTable

# facet -> (table, parent foreign key column or None)
REFERENCE_TABLES: Dict[FacetId, Tuple[Type[ReferenceOptionBase], Optional[str]]] = {
    FacetId.FIELD: (FieldOfActivityTable, None),
    FacetId.PROFESSION: (ProfessionTable, "field_of_activity_id"),
    FacetId.SERVICE: (ServiceTable, "profession_id"),
    FacetId.GENRE: (GenreTable, "service_id"),
    FacetId.WORK_FORMAT: (WorkFormatTable, None),
    FacetId.EMPLOYMENT_TYPE: (EmploymentTypeTable, None),
    FacetId.SKILL_LEVEL: (SkillLevelTable, None),
    FacetId.AVAILABILITY: (AvailabilityTable, None),
}


class CatalogMapper:
    """Maps reference table rows to catalog options."""

    @staticmethod
    def to_option(row: ReferenceOptionBase, facet_id: FacetId) -> Option:
        _, parent_column = REFERENCE_TABLES[facet_id]
        return Option(
            id=row.id,
            name=row.name,
            facet_id=facet_id,
            parent_id=getattr(row, parent_column) if parent_column else None,
            name_en=row.name_en,
            sort_order=row.sort_order or 0,
        )


class UserRowMapper:
    """Maps a user and its optional search profile to a UserRow."""

    @staticmethod
    def to_domain(user: UserTable, profile: Optional[SearchProfileTable]) -> UserRow:
        return UserRow(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            nickname=user.nickname,
            avatar=user.avatar,
            city=user.city,
            bio=user.bio,
            field_of_activity_id=user.field_of_activity_id,
            profession_id=user.profession_id,
            search_profile_id=profile.id if profile else None,
            service_id=profile.service_id if profile else None,
            genre_id=profile.genre_id if profile else None,
            work_format_id=profile.work_format_id if profile else None,
            employment_type_id=profile.employment_type_id if profile else None,
            skill_level_id=profile.skill_level_id if profile else None,
            availability_id=profile.availability_id if profile else None,
            price_per_hour=profile.price_per_hour if profile else None,
            price_per_event=profile.price_per_event if profile else None,
        )
