"""picks table

Revision ID: 0001_picks
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_picks"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "picks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sport_key", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.String(length=128), nullable=False),
        sa.Column("commence_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("home_team", sa.String(length=128), nullable=False),
        sa.Column("away_team", sa.String(length=128), nullable=False),
        sa.Column("selection", sa.String(length=128), nullable=False),
        sa.Column("market", sa.String(length=32), nullable=False, server_default="h2h"),
        sa.Column("fair_odds", sa.Float(), nullable=True),
        sa.Column("soft_odds", sa.Float(), nullable=False),
        sa.Column("ev_pct", sa.Float(), nullable=False),
        sa.Column("best_book", sa.String(length=64), nullable=True),
        sa.Column("sharp_sources", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="upcoming"),
        sa.Column("home_score", sa.Integer(), nullable=True),
        sa.Column("away_score", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("event_id", "selection", name="uq_pick_event_selection"),
    )

    op.create_index("ix_picks_sport_key", "picks", ["sport_key"])
    op.create_index("ix_picks_event_id", "picks", ["event_id"])
    op.create_index("ix_picks_commence_time", "picks", ["commence_time"])
    op.create_index("ix_picks_status", "picks", ["status"])


def downgrade() -> None:
    op.drop_index("ix_picks_status", table_name="picks")
    op.drop_index("ix_picks_commence_time", table_name="picks")
    op.drop_index("ix_picks_event_id", table_name="picks")
    op.drop_index("ix_picks_sport_key", table_name="picks")
    op.drop_table("picks")
