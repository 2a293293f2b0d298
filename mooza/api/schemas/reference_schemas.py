"""API response schemas for reference catalog options."""

from typing import List, Optional

from pydantic import Field

from mooza.api.schemas.base import CamelModel
from mooza.domain.entities.facet import FacetId, Option


class OptionResponse(CamelModel):
    """One selectable option of a facet."""

    id: str = Field(..., description="Option identifier")
    name: str = Field(..., description="Display name")
    name_en: Optional[str] = Field(None, description="English display name")
    sort_order: int = Field(0, description="Display position")
    parent_id: Optional[str] = Field(None, description="Option of the parent facet")
    user_count: Optional[int] = Field(None, ge=0, description="Discoverable users with this option")

    @classmethod
    def from_option(cls, option: Option) -> "OptionResponse":
        return cls(
            id=option.id,
            name=option.name,
            name_en=option.name_en,
            sort_order=option.sort_order,
            parent_id=option.parent_id,
            user_count=option.user_count,
        )


class CatalogResponse(CamelModel):
    """Every facet with its full option list."""

    fields_of_activity: List[OptionResponse] = Field(default_factory=list)
    professions: List[OptionResponse] = Field(default_factory=list)
    services: List[OptionResponse] = Field(default_factory=list)
    genres: List[OptionResponse] = Field(default_factory=list)
    work_formats: List[OptionResponse] = Field(default_factory=list)
    employment_types: List[OptionResponse] = Field(default_factory=list)
    skill_levels: List[OptionResponse] = Field(default_factory=list)
    availabilities: List[OptionResponse] = Field(default_factory=list)


CATALOG_RESPONSE_FIELDS = {
    FacetId.FIELD: "fields_of_activity",
    FacetId.PROFESSION: "professions",
    FacetId.SERVICE: "services",
    FacetId.GENRE: "genres",
    FacetId.WORK_FORMAT: "work_formats",
    FacetId.EMPLOYMENT_TYPE: "employment_types",
    FacetId.SKILL_LEVEL: "skill_levels",
    FacetId.AVAILABILITY: "availabilities",
}
