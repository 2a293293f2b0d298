"""
Reference catalog endpoints.

Option lists for every facet. Scoped facets accept their scope keys as
query parameters; without a scope key the full list is returned.
"""

from typing import Dict, List, Optional

import structlog
from fastapi import APIRouter, Query

from mooza.api.dependencies import CatalogServiceDep, map_domain_exception_to_http
from mooza.api.schemas.reference_schemas import CATALOG_RESPONSE_FIELDS, CatalogResponse, OptionResponse
from mooza.application.catalog_service import CatalogApplicationService
from mooza.core.dependencies import CurrentUserDep
from mooza.domain.entities.facet import FacetId
from mooza.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/references", tags=["references"])


async def _list_options(
    catalog_service: CatalogApplicationService,
    facet_id: FacetId,
    scope: Optional[Dict[FacetId, Optional[str]]] = None,
    search: Optional[str] = None,
    with_counts: bool = False,
) -> List[OptionResponse]:
    try:
        options = await catalog_service.list_options(
            facet_id,
            scope=scope,
            search=search,
            with_counts=with_counts,
        )
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    return [OptionResponse.from_option(o) for o in options]


@router.get("/fields-of-activity", response_model=List[OptionResponse])
async def list_fields_of_activity(
    current_user: CurrentUserDep,
    catalog_service: CatalogServiceDep,
    with_counts: bool = Query(False, alias="withCounts"),
) -> List[OptionResponse]:
    return await _list_options(catalog_service, FacetId.FIELD, with_counts=with_counts)


@router.get("/professions", response_model=List[OptionResponse])
async def list_professions(
    current_user: CurrentUserDep,
    catalog_service: CatalogServiceDep,
    field_of_activity_id: Optional[str] = Query(None, alias="fieldOfActivityId"),
    search: Optional[str] = Query(None, max_length=100, description="Case-insensitive name filter"),
    with_counts: bool = Query(False, alias="withCounts"),
) -> List[OptionResponse]:
    """Professions, optionally narrowed to one field of activity."""
    return await _list_options(
        catalog_service,
        FacetId.PROFESSION,
        scope={FacetId.FIELD: field_of_activity_id},
        search=search,
        with_counts=with_counts,
    )


@router.get("/services", response_model=List[OptionResponse])
async def list_services(
    current_user: CurrentUserDep,
    catalog_service: CatalogServiceDep,
    profession_id: Optional[str] = Query(None, alias="professionId"),
    field_of_activity_id: Optional[str] = Query(None, alias="fieldOfActivityId"),
    with_counts: bool = Query(False, alias="withCounts"),
) -> List[OptionResponse]:
    """
    Services scoped by profession, or by field of activity when no
    profession is given. The profession wins when both are present.
    """
    return await _list_options(
        catalog_service,
        FacetId.SERVICE,
        scope={FacetId.PROFESSION: profession_id, FacetId.FIELD: field_of_activity_id},
        with_counts=with_counts,
    )


@router.get("/genres", response_model=List[OptionResponse])
async def list_genres(
    current_user: CurrentUserDep,
    catalog_service: CatalogServiceDep,
    service_id: Optional[str] = Query(None, alias="serviceId"),
    with_counts: bool = Query(False, alias="withCounts"),
) -> List[OptionResponse]:
    return await _list_options(
        catalog_service,
        FacetId.GENRE,
        scope={FacetId.SERVICE: service_id},
        with_counts=with_counts,
    )


@router.get("/work-formats", response_model=List[OptionResponse])
async def list_work_formats(current_user: CurrentUserDep, catalog_service: CatalogServiceDep) -> List[OptionResponse]:
    return await _list_options(catalog_service, FacetId.WORK_FORMAT)


@router.get("/employment-types", response_model=List[OptionResponse])
async def list_employment_types(current_user: CurrentUserDep, catalog_service: CatalogServiceDep) -> List[OptionResponse]:
    return await _list_options(catalog_service, FacetId.EMPLOYMENT_TYPE)


@router.get("/skill-levels", response_model=List[OptionResponse])
async def list_skill_levels(current_user: CurrentUserDep, catalog_service: CatalogServiceDep) -> List[OptionResponse]:
    return await _list_options(catalog_service, FacetId.SKILL_LEVEL)


@router.get("/availabilities", response_model=List[OptionResponse])
async def list_availabilities(current_user: CurrentUserDep, catalog_service: CatalogServiceDep) -> List[OptionResponse]:
    return await _list_options(catalog_service, FacetId.AVAILABILITY)


@router.get("/all", response_model=CatalogResponse)
async def get_all_references(current_user: CurrentUserDep, catalog_service: CatalogServiceDep) -> CatalogResponse:
    """Every facet with its complete option list, for client-side caching."""
    try:
        catalog = await catalog_service.list_all()
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)

    return CatalogResponse(
        **{
            CATALOG_RESPONSE_FIELDS[facet_id]: [OptionResponse.from_option(o) for o in options]
            for facet_id, options in catalog.items()
            if facet_id in CATALOG_RESPONSE_FIELDS
        }
    )
