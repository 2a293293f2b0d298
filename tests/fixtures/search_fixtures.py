"""
Test data for search testing.

A small reference catalog with two fields and a four-level chain, plus
user rows covering each branch of it.
"""

from typing import Dict, List

from mooza.domain.entities.facet import FacetId, Option
from mooza.domain.entities.search import UserRow
from mooza.infrastructure.persistence.seed import SeedRow

CATALOG_OPTIONS: List[Option] = [
    Option(id="production", name="Production", facet_id=FacetId.FIELD),
    Option(id="performance", name="Performance", facet_id=FacetId.FIELD),
    Option(id="producer", name="Producer", facet_id=FacetId.PROFESSION, parent_id="production"),
    Option(id="sound-engineer", name="Sound engineer", facet_id=FacetId.PROFESSION, parent_id="production"),
    Option(id="vocalist", name="Vocalist", facet_id=FacetId.PROFESSION, parent_id="performance"),
    Option(id="mixing", name="Mixing", facet_id=FacetId.SERVICE, parent_id="producer", sort_order=1),
    Option(id="beatmaking", name="Beatmaking", facet_id=FacetId.SERVICE, parent_id="producer", sort_order=2),
    Option(id="mastering", name="Mastering", facet_id=FacetId.SERVICE, parent_id="sound-engineer", sort_order=3),
    Option(id="session-vocals", name="Session vocals", facet_id=FacetId.SERVICE, parent_id="vocalist", sort_order=4),
    Option(id="rock", name="Rock", facet_id=FacetId.GENRE, parent_id="mixing", sort_order=1),
    Option(id="pop", name="Pop", facet_id=FacetId.GENRE, parent_id="mixing", sort_order=2),
    Option(id="trap", name="Trap", facet_id=FacetId.GENRE, parent_id="beatmaking", sort_order=1),
    Option(id="jazz", name="Jazz", facet_id=FacetId.GENRE, parent_id="session-vocals", sort_order=1),
    Option(id="remote", name="Remote", facet_id=FacetId.WORK_FORMAT, sort_order=1),
    Option(id="on-site", name="On site", facet_id=FacetId.WORK_FORMAT, sort_order=2),
    Option(id="one-off", name="One-off project", facet_id=FacetId.EMPLOYMENT_TYPE, sort_order=1),
    Option(id="full-time", name="Full-time", facet_id=FacetId.EMPLOYMENT_TYPE, sort_order=2),
    Option(id="beginner", name="Beginner", facet_id=FacetId.SKILL_LEVEL, sort_order=1),
    Option(id="professional", name="Professional", facet_id=FacetId.SKILL_LEVEL, sort_order=2),
    Option(id="weekends", name="Weekends", facet_id=FacetId.AVAILABILITY, sort_order=1),
    Option(id="anytime", name="Anytime", facet_id=FacetId.AVAILABILITY, sort_order=2),
]


def make_user_row(user_id: str, first_name: str, last_name: str, **kwargs) -> UserRow:
    return UserRow(
        id=user_id,
        first_name=first_name,
        last_name=last_name,
        search_profile_id=kwargs.pop("search_profile_id", f"sp-{user_id}"),
        **kwargs,
    )


USER_ROWS: List[UserRow] = [
    make_user_row(
        "u-ivan", "Ivan", "Petrov", nickname="ivanbeats", city="Moscow",
        field_of_activity_id="production", profession_id="producer",
        service_id="mixing", genre_id="rock", work_format_id="remote",
        skill_level_id="professional", price_per_hour=50.0,
    ),
    make_user_row(
        "u-anna", "Anna", "Ivanova", bio="Pop mixing for indie labels",
        field_of_activity_id="production", profession_id="producer",
        service_id="mixing", genre_id="pop", work_format_id="on-site",
    ),
    make_user_row(
        "u-boris", "Boris", "Smirnov",
        field_of_activity_id="production", profession_id="producer",
        service_id="beatmaking", genre_id="trap", work_format_id="remote",
    ),
    make_user_row(
        "u-dmitry", "Dmitry", "Kuznetsov",
        field_of_activity_id="production", profession_id="sound-engineer",
        service_id="mastering", availability_id="weekends",
    ),
    make_user_row(
        "u-elena", "Elena", "Sokolova", nickname="elena.jazz",
        field_of_activity_id="performance", profession_id="vocalist",
        service_id="session-vocals", genre_id="jazz", employment_type_id="one-off",
    ),
    make_user_row(
        "u-me", "Ivan", "Caller",
        field_of_activity_id="production", profession_id="producer",
        service_id="mixing", genre_id="rock",
    ),
]




def catalog_seed_data() -> Dict[FacetId, List[SeedRow]]:
    """Seed rows for the test catalog, ordered by sort order."""
    data: Dict[FacetId, List[SeedRow]] = {}
    for option in sorted(CATALOG_OPTIONS, key=lambda o: o.sort_order):
        data.setdefault(option.facet_id, []).append((option.id, option.name, option.name, option.parent_id))
    return data
