"""Initial schema — coffee_beans, grind_settings, brewing_equipment, brew_sessions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "coffee_beans",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("brand", sa.String(100), nullable=False),
        sa.Column("roast_level", sa.String(40), nullable=False),
        sa.Column("origin", sa.String(200), nullable=False, server_default=""),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("modified_date", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "grind_settings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("grind_size", sa.Integer, nullable=False),
        sa.Column("grind_time_seconds", sa.Float, nullable=False),
        sa.Column("grind_weight", sa.Float, nullable=False),
        sa.Column("grinder_type", sa.String(100), nullable=False),
        sa.Column("notes", sa.String(500), nullable=False, server_default=""),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "brewing_equipment",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("vendor", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("type", sa.String(40), nullable=False),
        sa.Column("specifications", sa.JSON, nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "brew_sessions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("method", sa.String(40), nullable=False),
        sa.Column("water_temperature", sa.Float, nullable=False),
        sa.Column("brew_time_seconds", sa.Integer, nullable=False),
        sa.Column("tasting_notes", sa.String(1000), nullable=False, server_default=""),
        sa.Column("rating", sa.Integer, nullable=True),
        sa.Column("is_favorite", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("coffee_bean_id", sa.Integer, sa.ForeignKey("coffee_beans.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("grind_setting_id", sa.Integer, sa.ForeignKey("grind_settings.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("brewing_equipment_id", sa.Integer, sa.ForeignKey("brewing_equipment.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_brew_sessions_coffee_bean_id", "brew_sessions", ["coffee_bean_id"])
    op.create_index("ix_brew_sessions_grind_setting_id", "brew_sessions", ["grind_setting_id"])
    op.create_index("ix_brew_sessions_brewing_equipment_id", "brew_sessions", ["brewing_equipment_id"])
    op.create_index("ix_brew_sessions_created_date", "brew_sessions", ["created_date"])


def downgrade() -> None:
    op.drop_index("ix_brew_sessions_created_date", table_name="brew_sessions")
    op.drop_index("ix_brew_sessions_brewing_equipment_id", table_name="brew_sessions")
    op.drop_index("ix_brew_sessions_grind_setting_id", table_name="brew_sessions")
    op.drop_index("ix_brew_sessions_coffee_bean_id", table_name="brew_sessions")
    op.drop_table("brew_sessions")
    op.drop_table("brewing_equipment")
    op.drop_table("grind_settings")
    op.drop_table("coffee_beans")
