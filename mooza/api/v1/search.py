"""
Musician search endpoint.

Hierarchical faceted search over users and their search profiles. The
caller is always excluded from the results.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from mooza.api.dependencies import SearchServiceDep, map_domain_exception_to_http
from mooza.api.schemas.search_schemas import SearchResponse
from mooza.application.search_service import SearchRequest
from mooza.core.dependencies import CurrentUserDep, SettingsDep
from mooza.domain.entities.facet import FacetId
from mooza.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/references", tags=["search"])


@router.get("/search", response_model=SearchResponse)
async def search_musicians(
    current_user: CurrentUserDep,
    search_service: SearchServiceDep,
    settings: SettingsDep,
    field_id: Optional[str] = Query(None, alias="fieldId"),
    profession_id: Optional[str] = Query(None, alias="professionId"),
    service_id: Optional[str] = Query(None, alias="serviceId"),
    genre_id: Optional[str] = Query(None, alias="genreId"),
    work_format_id: Optional[str] = Query(None, alias="workFormatId"),
    employment_type_id: Optional[str] = Query(None, alias="employmentTypeId"),
    skill_level_id: Optional[str] = Query(None, alias="skillLevelId"),
    availability_id: Optional[str] = Query(None, alias="availabilityId"),
    query: Optional[str] = Query(None, max_length=200, description="Free text over names, nickname and bio"),
    page: int = Query(1, description="Page number (1-based); values below 1 mean the first page"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    include_facets: bool = Query(True, alias="includeFacets"),
) -> SearchResponse:
    """
    Search musicians by facet selections and free text.

    Selections must be consistent with each other: a profession has to belong
    to the selected field, a service to the selected profession, and so on.
    An inconsistent or unknown option is rejected with 400.
    """
    request = SearchRequest(
        selections={
            FacetId.FIELD: field_id,
            FacetId.PROFESSION: profession_id,
            FacetId.SERVICE: service_id,
            FacetId.GENRE: genre_id,
            FacetId.WORK_FORMAT: work_format_id,
            FacetId.EMPLOYMENT_TYPE: employment_type_id,
            FacetId.SKILL_LEVEL: skill_level_id,
            FacetId.AVAILABILITY: availability_id,
        },
        query=query,
        page=page,
        page_size=limit or settings.SEARCH_DEFAULT_PAGE_SIZE,
        include_facets=include_facets,
    )

    try:
        page_result = await search_service.search(request, caller_id=current_user.user_id)
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:  # pragma: no cover - unexpected errors bubble to API layer
        logger.error("Search request failed", error=str(exc))
        raise HTTPException(
            status_code=500,
            detail={
                "error": "search_failed",
                "message": "Search request could not be completed",
            },
        ) from exc

    return SearchResponse.from_page(page_result)
