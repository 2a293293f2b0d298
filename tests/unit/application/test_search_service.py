"""
Unit tests for SearchApplicationService.

Covers:
- Selection validation against the catalog
- Caller exclusion
- Page size bounds
- Result page caching
"""

from unittest.mock import AsyncMock

import pytest

from mooza.application.catalog_service import CatalogApplicationService
from mooza.application.search_service import SearchApplicationService, SearchRequest
from mooza.domain.entities.facet import FacetId
from mooza.domain.exceptions import InvalidOptionError, SearchUnavailableError, ValidationError

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def catalog_service(catalog_repository, cache_service):
    return CatalogApplicationService(catalog_repository, cache_service)


@pytest.fixture
def search_service(catalog_service, search_repository):
    return SearchApplicationService(catalog_service, search_repository, max_page_size=50)


@pytest.fixture
def cached_search_service(catalog_service, search_repository, cache_service):
    return SearchApplicationService(
        catalog_service,
        search_repository,
        cache_service=cache_service,
        result_cache_ttl=60,
    )


# =============================================================================
# TESTS
# =============================================================================


class TestSearch:
    async def test_empty_request_lists_everyone_but_caller(self, search_service):
        page = await search_service.search(SearchRequest(), caller_id="u-me")

        ids = [r.user.id for r in page.results]
        assert "u-me" not in ids
        assert page.pagination.total_count == 5

    async def test_other_caller_sees_the_first_user(self, search_service):
        page = await search_service.search(SearchRequest(), caller_id="u-anna")

        ids = [r.user.id for r in page.results]
        assert "u-me" in ids
        assert "u-anna" not in ids

    async def test_selections_narrow_results(self, search_service):
        request = SearchRequest(
            selections={
                FacetId.FIELD: "production",
                FacetId.PROFESSION: "producer",
                FacetId.WORK_FORMAT: "remote",
            }
        )

        page = await search_service.search(request, caller_id="u-me")

        assert [r.user.id for r in page.results] == ["u-boris", "u-ivan"]

    async def test_text_query_matches_bio(self, search_service):
        page = await search_service.search(SearchRequest(query="INDIE"), caller_id="u-me")

        assert [r.user.id for r in page.results] == ["u-anna"]

    async def test_unknown_option_is_rejected(self, search_service, search_repository):
        request = SearchRequest(selections={FacetId.GENRE: "polka"})

        with pytest.raises(InvalidOptionError) as exc_info:
            await search_service.search(request, caller_id="u-me")

        assert exc_info.value.facet_id == "genre"
        assert search_repository.call_log == []

    async def test_inconsistent_hierarchy_is_rejected(self, search_service):
        request = SearchRequest(selections={FacetId.FIELD: "performance", FacetId.SERVICE: "mixing"})

        with pytest.raises(InvalidOptionError):
            await search_service.search(request, caller_id="u-me")

    @pytest.mark.parametrize("page_size", [0, 51])
    async def test_page_size_out_of_bounds(self, search_service, page_size):
        with pytest.raises(ValidationError):
            await search_service.search(SearchRequest(page_size=page_size), caller_id="u-me")

    async def test_missing_caller_is_rejected(self, search_service):
        with pytest.raises(ValidationError):
            await search_service.search(SearchRequest(), caller_id="")

    async def test_store_failure_propagates(self, search_service, search_repository):
        search_repository.should_fail = True

        with pytest.raises(SearchUnavailableError):
            await search_service.search(SearchRequest(), caller_id="u-me")


class TestResultCache:
    async def test_repeated_search_is_served_from_cache(self, cached_search_service, search_repository):
        request = SearchRequest(selections={FacetId.FIELD: "production"})

        first = await cached_search_service.search(request, caller_id="u-me")
        calls = len(search_repository.call_log)
        second = await cached_search_service.search(request, caller_id="u-me")

        assert second is first
        assert len(search_repository.call_log) == calls

    async def test_cache_is_keyed_by_caller(self, cached_search_service, search_repository):
        await cached_search_service.search(SearchRequest(), caller_id="u-me")
        calls = len(search_repository.call_log)

        page = await cached_search_service.search(SearchRequest(), caller_id="u-anna")

        assert len(search_repository.call_log) > calls
        assert "u-anna" not in [r.user.id for r in page.results]

    async def test_no_cache_without_ttl(self, catalog_service, search_repository):
        cache = AsyncMock()
        service = SearchApplicationService(catalog_service, search_repository, cache_service=cache)

        await service.search(SearchRequest(), caller_id="u-me")

        cache.get.assert_not_called()
        cache.set.assert_not_called()
