"""
Service dependencies for the HTTP layer and domain error translation.
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException

from mooza.application.catalog_service import CatalogApplicationService
from mooza.application.search_service import SearchApplicationService
from mooza.domain.exceptions import (
    DomainException,
    InvalidOptionError,
    ProcessingError,
    SearchUnavailableError,
    ValidationError,
)
from mooza.infrastructure.providers.catalog_provider import get_catalog_service as provide_catalog_service
from mooza.infrastructure.providers.search_provider import get_search_service as provide_search_service

logger = structlog.get_logger(__name__)


async def get_search_service() -> SearchApplicationService:
    try:
        return await provide_search_service()
    except DomainException as e:
        raise map_domain_exception_to_http(e) from e
    except Exception as e:
        logger.error("Search service could not be built", error=str(e))
        raise HTTPException(status_code=503, detail="Search service unavailable") from e


async def get_catalog_service() -> CatalogApplicationService:
    try:
        return await provide_catalog_service()
    except DomainException as e:
        raise map_domain_exception_to_http(e) from e
    except Exception as e:
        logger.error("Catalog service could not be built", error=str(e))
        raise HTTPException(status_code=503, detail="Catalog service unavailable") from e


SearchServiceDep = Annotated[SearchApplicationService, Depends(get_search_service)]
CatalogServiceDep = Annotated[CatalogApplicationService, Depends(get_catalog_service)]


def map_domain_exception_to_http(exception: Exception) -> HTTPException:
    """Translate an error raised below the API into an HTTPException.

    Client errors keep their message; server-side failures get a fixed
    detail so internals are never echoed back.
    """
    if isinstance(exception, InvalidOptionError):
        return HTTPException(
            status_code=400,
            detail={
                "error": "invalid_option",
                "facet": exception.facet_id,
                "option": exception.option_id,
                "message": str(exception),
            },
        )
    if isinstance(exception, ValidationError):
        return HTTPException(status_code=400, detail=str(exception))
    if isinstance(exception, SearchUnavailableError):
        logger.warning("Search store unavailable", error=str(exception))
        return HTTPException(status_code=503, detail=str(exception))
    if isinstance(exception, ProcessingError):
        return HTTPException(status_code=422, detail=str(exception))

    if isinstance(exception, DomainException):
        detail = "Domain operation failed"
    else:
        detail = "Internal server error"
    logger.error("Unexpected error reached the API", exception_type=type(exception).__name__, error=str(exception))
    return HTTPException(status_code=500, detail=detail)


__all__ = [
    "get_search_service",
    "get_catalog_service",
    "SearchServiceDep",
    "CatalogServiceDep",
    "map_domain_exception_to_http",
]
