"""Unit tests for FilterState and its cascade rule."""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.domain.entities.facet import DEFAULT_HIERARCHY, FacetId
from mooza.domain.entities.filter_state import FilterState
from mooza.domain.exceptions import InvalidOptionError, ValidationError
from tests.fixtures.search_fixtures import CATALOG_OPTIONS

# =============================================================================
# STRATEGIES
# =============================================================================

_CATALOG = ReferenceCatalog.from_options(CATALOG_OPTIONS)

_option_ids = {
    facet_id: [o.id for o in _CATALOG.options(facet_id)] + [None]
    for facet_id in DEFAULT_HIERARCHY.facet_ids
}


@st.composite
def filter_states(draw):
    """Arbitrary states built through set_facet, without catalog validation."""
    state = FilterState.empty()
    for facet_id in draw(st.lists(st.sampled_from(DEFAULT_HIERARCHY.facet_ids), max_size=8)):
        state = state.set_facet(facet_id, draw(st.sampled_from(_option_ids[facet_id])))
    return state.set_page(draw(st.integers(min_value=1, max_value=20)))


class TestCascade:
    """Changing a facet clears every facet scoped by it."""

    @settings(max_examples=200, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(
        state=filter_states(),
        facet_id=st.sampled_from(DEFAULT_HIERARCHY.facet_ids),
        data=st.data(),
    )
    def test_changed_value_clears_descendants_and_keeps_others(self, state, facet_id, data):
        new_value = data.draw(st.sampled_from(_option_ids[facet_id]))
        updated = state.set_facet(facet_id, new_value)

        if new_value == state.selected(facet_id):
            assert updated == state
            return

        descendants = DEFAULT_HIERARCHY.descendants(facet_id)
        assert updated.selected(facet_id) == new_value
        assert updated.page == 1
        for other in DEFAULT_HIERARCHY.facet_ids:
            if other in descendants:
                assert updated.selected(other) is None
            elif other != facet_id:
                assert updated.selected(other) == state.selected(other)

    @settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(state=filter_states())
    def test_reset_all_is_idempotent(self, state):
        once = state.reset_all()
        assert once.active_selections() == ()
        assert once.page == 1
        assert once.query is None
        assert once.reset_all() == once

    def test_changing_field_clears_whole_chain(self, narrowed_state: FilterState, catalog: ReferenceCatalog):
        updated = narrowed_state.set_facet(FacetId.FIELD, "performance", catalog)

        assert updated.selections == {
            FacetId.FIELD: "performance",
            FacetId.PROFESSION: None,
            FacetId.SERVICE: None,
            FacetId.GENRE: None,
            FacetId.WORK_FORMAT: None,
            FacetId.EMPLOYMENT_TYPE: None,
            FacetId.SKILL_LEVEL: None,
            FacetId.AVAILABILITY: None,
        }

    def test_changing_profession_keeps_field(self, narrowed_state: FilterState, catalog: ReferenceCatalog):
        updated = narrowed_state.set_facet(FacetId.PROFESSION, "sound-engineer", catalog)

        assert updated.selected(FacetId.FIELD) == "production"
        assert updated.selected(FacetId.PROFESSION) == "sound-engineer"
        assert updated.selected(FacetId.SERVICE) is None
        assert updated.selected(FacetId.GENRE) is None

    def test_flat_facet_change_does_not_cascade(self, narrowed_state: FilterState):
        updated = narrowed_state.set_facet(FacetId.WORK_FORMAT, "remote")

        assert updated.selected(FacetId.GENRE) == "rock"
        assert updated.selected(FacetId.WORK_FORMAT) == "remote"

    def test_clearing_a_facet_also_cascades(self, narrowed_state: FilterState):
        updated = narrowed_state.clear_facet(FacetId.SERVICE)

        assert updated.selected(FacetId.PROFESSION) == "producer"
        assert updated.selected(FacetId.SERVICE) is None
        assert updated.selected(FacetId.GENRE) is None

    def test_reselecting_same_value_is_a_no_op(self, narrowed_state: FilterState):
        paged = narrowed_state.set_page(3)
        assert paged.set_facet(FacetId.FIELD, "production") is paged


class TestValidation:
    """Options are validated against the catalog when one is given."""

    def test_unknown_option_raises(self, empty_state: FilterState, catalog: ReferenceCatalog):
        with pytest.raises(InvalidOptionError) as exc_info:
            empty_state.set_facet(FacetId.PROFESSION, "astronaut", catalog)

        assert exc_info.value.facet_id == "profession"
        assert exc_info.value.option_id == "astronaut"

    def test_option_under_other_ancestor_raises(self, empty_state: FilterState, catalog: ReferenceCatalog):
        state = empty_state.set_facet(FacetId.FIELD, "performance", catalog)

        with pytest.raises(InvalidOptionError):
            state.set_facet(FacetId.PROFESSION, "producer", catalog)

    def test_grandparent_mismatch_raises(self, empty_state: FilterState, catalog: ReferenceCatalog):
        state = empty_state.set_facet(FacetId.FIELD, "performance", catalog)

        with pytest.raises(InvalidOptionError):
            state.set_facet(FacetId.GENRE, "rock", catalog)

    def test_option_without_selected_ancestor_is_accepted(self, empty_state: FilterState, catalog: ReferenceCatalog):
        state = empty_state.set_facet(FacetId.GENRE, "trap", catalog)
        assert state.selected(FacetId.GENRE) == "trap"

    def test_bound_catalog_validates_without_argument(self, catalog: ReferenceCatalog):
        state = FilterState.empty(catalog=catalog)

        with pytest.raises(InvalidOptionError):
            state.set_facet(FacetId.FIELD, "no-such-field")

    def test_bound_catalog_survives_mutations(self, catalog: ReferenceCatalog):
        state = FilterState.empty(catalog=catalog).set_facet(FacetId.FIELD, "performance").set_page(3)

        assert state.catalog is catalog
        with pytest.raises(InvalidOptionError):
            state.set_facet(FacetId.PROFESSION, "producer")

    def test_from_selections_binds_catalog(self, catalog: ReferenceCatalog):
        state = FilterState.from_selections({FacetId.FIELD: "production"}, catalog=catalog)

        with pytest.raises(InvalidOptionError):
            state.set_facet(FacetId.GENRE, "polka")

    def test_bound_catalog_does_not_affect_equality(self, catalog: ReferenceCatalog):
        bound = FilterState.empty(catalog=catalog).set_facet(FacetId.WORK_FORMAT, "remote")
        unbound = FilterState.empty().set_facet(FacetId.WORK_FORMAT, "remote")

        assert bound == unbound
        assert hash(bound) == hash(unbound)

    def test_unbound_state_skips_validation(self, empty_state: FilterState):
        state = empty_state.set_facet(FacetId.FIELD, "no-such-field")
        assert state.selected(FacetId.FIELD) == "no-such-field"

    def test_blank_option_clears(self, narrowed_state: FilterState):
        assert narrowed_state.set_facet(FacetId.GENRE, "  ").selected(FacetId.GENRE) is None


class TestPagingAndQuery:
    def test_page_below_one_is_clamped(self, empty_state: FilterState):
        assert empty_state.set_page(0).page == 1
        assert empty_state.set_page(-5).page == 1
        assert empty_state.prev_page().page == 1

    def test_next_page_and_offset(self, empty_state: FilterState):
        state = empty_state.set_page_size(10).next_page().next_page()
        assert state.page == 3
        assert state.offset == 20

    def test_invalid_page_size(self):
        with pytest.raises(ValidationError):
            FilterState.empty(page_size=0)

    def test_query_change_resets_page(self, empty_state: FilterState):
        state = empty_state.set_page(4).set_query("  ivan ")
        assert state.query == "ivan"
        assert state.page == 1
        assert empty_state.set_query("   ").query is None

    def test_facet_change_resets_page(self, empty_state: FilterState):
        state = empty_state.set_page(5).set_facet(FacetId.WORK_FORMAT, "remote")
        assert state.page == 1


class TestFromSelections:
    def test_applies_selections_top_down(self, catalog: ReferenceCatalog):
        state = FilterState.from_selections(
            {
                FacetId.GENRE: "rock",
                FacetId.SERVICE: "mixing",
                FacetId.FIELD: "production",
                FacetId.PROFESSION: "producer",
            },
            catalog=catalog,
            page=2,
            query="ivan",
        )

        assert [facet for facet, _ in state.active_selections()] == [
            FacetId.FIELD,
            FacetId.PROFESSION,
            FacetId.SERVICE,
            FacetId.GENRE,
        ]
        assert state.page == 2
        assert state.query == "ivan"

    def test_accepts_string_keys_and_skips_empty_values(self, catalog: ReferenceCatalog):
        state = FilterState.from_selections({"work_format": "remote", "genre": None, "field": ""}, catalog=catalog)
        assert state.active_selections() == ((FacetId.WORK_FORMAT, "remote"),)

    def test_inconsistent_selections_raise(self, catalog: ReferenceCatalog):
        with pytest.raises(InvalidOptionError):
            FilterState.from_selections(
                {FacetId.FIELD: "performance", FacetId.PROFESSION: "producer"},
                catalog=catalog,
            )
