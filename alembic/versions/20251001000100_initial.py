"""initial leagues, matches and predictions

Revision ID: 20251001000100
Revises: 
Create Date: 2025-10-01 00:01:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251001000100"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=True,
    )


def upgrade() -> None:
    op.create_table(
        "leagues",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("championship", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("start_condition", sa.String(), nullable=True),
        sa.Column("start_min_participants", sa.Integer(), nullable=True),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("signup_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("participants", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "league_matches",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("league_id", sa.String(length=36), sa.ForeignKey("leagues.id"), nullable=False),
        sa.Column("home_team", sa.String(), nullable=False),
        sa.Column("away_team", sa.String(), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="upcoming"),
        sa.Column("home_score", sa.Integer(), nullable=True),
        sa.Column("away_score", sa.Integer(), nullable=True),
        sa.Column("external_ref", sa.String(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("league_id", "external_ref", name="uq_league_matches_external_ref"),
    )
    op.create_index("ix_league_matches_league_id", "league_matches", ["league_id"], unique=False)

    op.create_table(
        "league_predictions",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("league_id", sa.String(length=36), sa.ForeignKey("leagues.id"), nullable=False),
        sa.Column("match_id", sa.String(length=36), sa.ForeignKey("league_matches.id"), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("home_score", sa.Integer(), nullable=True),
        sa.Column("away_score", sa.Integer(), nullable=True),
        sa.Column("confident", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("points", sa.Float(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="draft"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("match_id", "user_id", name="uq_league_predictions_match_user"),
    )
    op.create_index("ix_league_predictions_id", "league_predictions", ["id"], unique=False)
    op.create_index("ix_league_predictions_league_id", "league_predictions", ["league_id"], unique=False)
    op.create_index("ix_league_predictions_match_id", "league_predictions", ["match_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_league_predictions_match_id", table_name="league_predictions")
    op.drop_index("ix_league_predictions_league_id", table_name="league_predictions")
    op.drop_index("ix_league_predictions_id", table_name="league_predictions")
    op.drop_table("league_predictions")
    op.drop_index("ix_league_matches_league_id", table_name="league_matches")
    op.drop_table("league_matches")
    op.drop_table("leagues")
