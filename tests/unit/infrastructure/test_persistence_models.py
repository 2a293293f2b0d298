"""Unit tests for table defaults."""

from datetime import timezone

from mooza.domain.entities.catalog import ReferenceCatalog
from mooza.infrastructure.persistence.models import (
    FieldOfActivityTable,
    SearchProfileTable,
    UserTable,
)


class TestTimestampDefaults:
    def test_reference_rows_are_timezone_aware(self):
        row = FieldOfActivityTable(id="production", name="Production")
        assert row.created_at.tzinfo is not None
        assert row.created_at.utcoffset() == timezone.utc.utcoffset(None)

    def test_user_rows_are_timezone_aware(self):
        assert UserTable(id="u-1", first_name="Ivan", last_name="Petrov").created_at.tzinfo is not None

    def test_profile_rows_are_timezone_aware(self):
        assert SearchProfileTable(id="sp-1", user_id="u-1").updated_at.tzinfo is not None

    def test_reference_columns_store_timezone(self):
        assert FieldOfActivityTable.__table__.c.created_at.type.timezone is True
        assert UserTable.__table__.c.created_at.type.timezone is True
        assert SearchProfileTable.__table__.c.updated_at.type.timezone is True


def test_catalog_snapshot_time_is_timezone_aware(catalog: ReferenceCatalog):
    assert catalog.loaded_at.tzinfo is not None
