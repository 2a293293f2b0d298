"""API router assembly."""

from fastapi import APIRouter

from mooza.api.v1 import references, search


def create_api_router() -> APIRouter:
    """Create the /api/v1 router with every endpoint mounted."""
    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(search.router)
    api_router.include_router(references.router)
    return api_router


__all__ = ["create_api_router"]
