"""API request and response schemas for musician search."""

from typing import List, Optional

from pydantic import Field

from mooza.api.schemas.base import CamelModel
from mooza.domain.entities.facet import FacetId
from mooza.domain.entities.search import FacetCount, NamedRef, SearchPage, SearchResult


class NamedRefResponse(CamelModel):
    id: str
    name: str

    @classmethod
    def from_ref(cls, ref: Optional[NamedRef]) -> Optional["NamedRefResponse"]:
        return cls(id=ref.id, name=ref.name) if ref else None


class SearchUserResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    city: Optional[str] = None
    field_of_activity: Optional[NamedRefResponse] = None
    profession: Optional[NamedRefResponse] = None


class SearchProfileResponse(CamelModel):
    service: Optional[NamedRefResponse] = None
    genre: Optional[NamedRefResponse] = None
    work_format: Optional[NamedRefResponse] = None
    employment_type: Optional[NamedRefResponse] = None
    skill_level: Optional[NamedRefResponse] = None
    availability: Optional[NamedRefResponse] = None
    price_per_hour: Optional[float] = None
    price_per_event: Optional[float] = None


class SearchResultResponse(CamelModel):
    """A matching user with their search profile."""

    id: str
    user: SearchUserResponse
    search_profile: SearchProfileResponse

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultResponse":
        user = result.user
        profile = result.search_profile
        ref = NamedRefResponse.from_ref
        return cls(
            id=result.id,
            user=SearchUserResponse(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                nickname=user.nickname,
                avatar=user.avatar,
                city=user.city,
                field_of_activity=ref(user.field_of_activity),
                profession=ref(user.profession),
            ),
            search_profile=SearchProfileResponse(
                service=ref(profile.service),
                genre=ref(profile.genre),
                work_format=ref(profile.work_format),
                employment_type=ref(profile.employment_type),
                skill_level=ref(profile.skill_level),
                availability=ref(profile.availability),
                price_per_hour=profile.price_per_hour,
                price_per_event=profile.price_per_event,
            ),
        )


class PaginationResponse(CamelModel):
    page: int = Field(..., ge=1, description="Current page (1-based)")
    limit: int = Field(..., ge=1, description="Page size")
    total_count: int = Field(..., ge=0, description="Matches across all pages")
    total_pages: int = Field(..., ge=0, description="0 when nothing matches")


class FacetCountResponse(CamelModel):
    id: str
    name: Optional[str] = None
    count: int = Field(..., ge=0)
    parent_id: Optional[str] = None

    @classmethod
    def from_count(cls, count: FacetCount) -> "FacetCountResponse":
        return cls(id=count.option_id, name=count.name, count=count.count, parent_id=count.parent_id)


class SearchFacetsResponse(CamelModel):
    fields: List[FacetCountResponse] = Field(default_factory=list)
    professions: List[FacetCountResponse] = Field(default_factory=list)
    services: List[FacetCountResponse] = Field(default_factory=list)
    genres: List[FacetCountResponse] = Field(default_factory=list)


class SearchResponse(CamelModel):
    """One page of search results."""

    results: List[SearchResultResponse] = Field(default_factory=list)
    pagination: PaginationResponse
    facets: SearchFacetsResponse = Field(default_factory=SearchFacetsResponse)

    @classmethod
    def from_page(cls, page: SearchPage) -> "SearchResponse":
        def counts(facet_id: FacetId) -> List[FacetCountResponse]:
            return [FacetCountResponse.from_count(c) for c in page.facets.get(facet_id, [])]

        return cls(
            results=[SearchResultResponse.from_result(r) for r in page.results],
            pagination=PaginationResponse(
                page=page.pagination.page,
                limit=page.pagination.page_size,
                total_count=page.pagination.total_count,
                total_pages=page.pagination.total_pages,
            ),
            facets=SearchFacetsResponse(
                fields=counts(FacetId.FIELD),
                professions=counts(FacetId.PROFESSION),
                services=counts(FacetId.SERVICE),
                genres=counts(FacetId.GENRE),
            ),
        )
