"""Shared pytest fixtures for the search service."""

from __future__ import annotations

import os
from typing import List

os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "json")

import pytest

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import FacetId
from mooza.domain.entities.filter_state import FilterState
from mooza.domain.entities.search import UserRow
from mooza.infrastructure.adapters.memory_cache_adapter import MemoryCacheService
from tests.fixtures.search_fixtures import CATALOG_OPTIONS, USER_ROWS
from tests.mocks.mock_repositories import MockCatalogRepository, MockSearchRepository


@pytest.fixture
def catalog() -> ReferenceCatalog:
    """Reference catalog with two fields and a four-level chain."""
    return ReferenceCatalog.from_options(CATALOG_OPTIONS)


@pytest.fixture
def empty_state() -> FilterState:
    return FilterState.empty()


@pytest.fixture
def narrowed_state(catalog: ReferenceCatalog) -> FilterState:
    """Field > Profession > Service > Genre all selected."""
    return (
        FilterState.empty(catalog=catalog)
        .set_facet(FacetId.FIELD, "production")
        .set_facet(FacetId.PROFESSION, "producer")
        .set_facet(FacetId.SERVICE, "mixing")
        .set_facet(FacetId.GENRE, "rock")
    )


@pytest.fixture
def user_rows() -> List[UserRow]:
    return list(USER_ROWS)


@pytest.fixture
def catalog_repository(catalog: ReferenceCatalog) -> MockCatalogRepository:
    return MockCatalogRepository(catalog)


@pytest.fixture
def search_repository(user_rows: List[UserRow]) -> MockSearchRepository:
    return MockSearchRepository(user_rows)


@pytest.fixture
def cache_service() -> MemoryCacheService:
    return MemoryCacheService(max_size=100)
