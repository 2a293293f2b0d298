"""Unit tests for QueryCompiler."""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import DEFAULT_HIERARCHY, FacetId, JoinTarget
from mooza.domain.entities.filter_state import FilterState
from mooza.domain.entities.search import TEXT_SEARCH_FIELDS
from mooza.domain.exceptions import ValidationError
from mooza.domain.services.query_compiler import QueryCompiler


@pytest.fixture
def compiler() -> QueryCompiler:
    return QueryCompiler()


class TestCompile:
    def test_empty_state_has_only_self_exclusion(self, compiler: QueryCompiler, empty_state: FilterState):
        descriptor = compiler.compile(empty_state, exclude_user_id="u-me")

        assert descriptor.predicates == ()
        assert descriptor.text_predicate is None
        assert descriptor.exclude_user_id == "u-me"
        assert descriptor.offset == 0
        assert descriptor.limit == 20

    def test_predicates_follow_join_targets(self, compiler: QueryCompiler, narrowed_state: FilterState):
        descriptor = compiler.compile(narrowed_state, exclude_user_id="u-me")

        user_columns = {p.column for p in descriptor.predicates_for(JoinTarget.USER)}
        profile_columns = {p.column for p in descriptor.predicates_for(JoinTarget.SEARCH_PROFILE)}

        assert user_columns == {"field_of_activity_id", "profession_id"}
        assert profile_columns == {"service_id", "genre_id"}

    def test_genre_and_work_format_scenario(
        self, compiler: QueryCompiler, empty_state: FilterState, catalog: ReferenceCatalog
    ):
        state = (
            empty_state
            .set_facet(FacetId.SERVICE, "mixing", catalog)
            .set_facet(FacetId.GENRE, "rock", catalog)
            .set_facet(FacetId.WORK_FORMAT, "remote", catalog)
            .set_page(2)
        )

        descriptor = compiler.compile(state, "ivan", exclude_user_id="u-me")

        assert [(p.facet_id, p.value) for p in descriptor.predicates] == [
            (FacetId.SERVICE, "mixing"),
            (FacetId.GENRE, "rock"),
            (FacetId.WORK_FORMAT, "remote"),
        ]
        assert descriptor.text_predicate.term == "ivan"
        assert descriptor.text_predicate.fields == TEXT_SEARCH_FIELDS
        assert descriptor.offset == 20
        assert descriptor.page == 2

    def test_text_falls_back_to_state_query(self, compiler: QueryCompiler, empty_state: FilterState):
        descriptor = compiler.compile(empty_state.set_query("beats"), exclude_user_id="u-me")
        assert descriptor.text_predicate.term == "beats"

    def test_blank_text_is_dropped(self, compiler: QueryCompiler, empty_state: FilterState):
        descriptor = compiler.compile(empty_state, "   ", exclude_user_id="u-me")
        assert descriptor.text_predicate is None

    @pytest.mark.parametrize("caller", ["", None])
    def test_caller_is_required(self, compiler: QueryCompiler, empty_state: FilterState, caller):
        with pytest.raises(ValidationError):
            compiler.compile(empty_state, exclude_user_id=caller)

    def test_without_pagination_keeps_predicates(self, compiler: QueryCompiler, narrowed_state: FilterState):
        descriptor = compiler.compile(narrowed_state.set_page(3), exclude_user_id="u-me")

        unpaged = descriptor.without_pagination()

        assert unpaged.predicates == descriptor.predicates
        assert unpaged.offset == 0
        assert unpaged.page == 1

    def test_without_facet_drops_only_that_predicate(self, compiler: QueryCompiler, narrowed_state: FilterState):
        descriptor = compiler.compile(narrowed_state, exclude_user_id="u-me")

        reduced = descriptor.without_facet(FacetId.GENRE)

        assert not reduced.has_facet(FacetId.GENRE)
        assert reduced.has_facet(FacetId.SERVICE)
        assert reduced.exclude_user_id == "u-me"


class TestDeterminism:
    @settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(
        selections=st.dictionaries(
            st.sampled_from(DEFAULT_HIERARCHY.facet_ids),
            st.text(alphabet="abcdefgh-", min_size=1, max_size=8),
        ),
        query=st.one_of(st.none(), st.text(max_size=12)),
        page=st.integers(min_value=1, max_value=50),
    )
    def test_equal_states_compile_to_equal_descriptors(self, selections, query, page):
        compiler = QueryCompiler()
        first = FilterState.from_selections(selections, page=page, query=query)
        second = FilterState.from_selections(dict(reversed(list(selections.items()))), page=page, query=query)

        a = compiler.compile(first, exclude_user_id="u-me")
        b = compiler.compile(second, exclude_user_id="u-me")

        assert a == b
        assert a.cache_key() == b.cache_key()

    @settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(caller=st.text(alphabet="abcdef0123456789-", min_size=1, max_size=12))
    def test_caller_is_always_excluded(self, caller):
        descriptor = QueryCompiler().compile(FilterState.empty(), exclude_user_id=caller)
        assert descriptor.exclude_user_id == caller

    def test_cache_key_changes_with_caller(self, compiler: QueryCompiler, narrowed_state: FilterState):
        a = compiler.compile(narrowed_state, exclude_user_id="u-1")
        b = compiler.compile(narrowed_state, exclude_user_id="u-2")
        assert a.cache_key() != b.cache_key()
