"""create reference catalog and search tables

Revision ID: 3b8f1c2d9a47
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b8f1c2d9a47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

FLAT_TABLES = ("work_formats", "employment_types", "skill_levels", "availabilities")


def _reference_columns():
    return [
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("name_en", sa.String(length=200), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "fields_of_activity",
        *_reference_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "professions",
        *_reference_columns(),
        sa.Column("field_of_activity_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["field_of_activity_id"], ["fields_of_activity.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_professions_field", "professions", ["field_of_activity_id"])
    op.create_table(
        "services",
        *_reference_columns(),
        sa.Column("profession_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["profession_id"], ["professions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_services_profession", "services", ["profession_id"])
    op.create_table(
        "genres",
        *_reference_columns(),
        sa.Column("service_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_genres_service", "genres", ["service_id"])
    for table_name in FLAT_TABLES:
        op.create_table(table_name, *_reference_columns(), sa.PrimaryKeyConstraint("id"))

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("nickname", sa.String(length=100), nullable=True),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("field_of_activity_id", sa.String(length=64), nullable=True),
        sa.Column("profession_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["field_of_activity_id"], ["fields_of_activity.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["profession_id"], ["professions.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_name", "users", ["first_name", "last_name"])
    op.create_index("idx_users_field", "users", ["field_of_activity_id"])
    op.create_index("idx_users_profession", "users", ["profession_id"])

    op.create_table(
        "search_profiles",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("service_id", sa.String(length=64), nullable=True),
        sa.Column("genre_id", sa.String(length=64), nullable=True),
        sa.Column("work_format_id", sa.String(length=64), nullable=True),
        sa.Column("employment_type_id", sa.String(length=64), nullable=True),
        sa.Column("skill_level_id", sa.String(length=64), nullable=True),
        sa.Column("availability_id", sa.String(length=64), nullable=True),
        sa.Column("price_per_hour", sa.Float(), nullable=True),
        sa.Column("price_per_event", sa.Float(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["genre_id"], ["genres.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["work_format_id"], ["work_formats.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["employment_type_id"], ["employment_types.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["skill_level_id"], ["skill_levels.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["availability_id"], ["availabilities.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index("idx_search_profiles_service_genre", "search_profiles", ["service_id", "genre_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_search_profiles_service_genre", table_name="search_profiles")
    op.drop_table("search_profiles")
    op.drop_index("idx_users_profession", table_name="users")
    op.drop_index("idx_users_field", table_name="users")
    op.drop_index("idx_users_name", table_name="users")
    op.drop_table("users")
    for table_name in reversed(FLAT_TABLES):
        op.drop_table(table_name)
    op.drop_index("idx_genres_service", table_name="genres")
    op.drop_table("genres")
    op.drop_index("idx_services_profession", table_name="services")
    op.drop_table("services")
    op.drop_index("idx_professions_field", table_name="professions")
    op.drop_table("professions")
    op.drop_table("fields_of_activity")
