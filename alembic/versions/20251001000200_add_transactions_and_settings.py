"""add league transactions and app settings

Revision ID: 20251001000200
Revises: 20251001000100
Create Date: 2025-10-01 00:02:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20251001000200"
down_revision = "20251001000100"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "league_transactions",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("league_id", sa.String(length=36), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("tx_hash", sa.String(), nullable=False),
        sa.Column("wallet_address", sa.String(), nullable=True),
        sa.Column("chain_id", sa.Integer(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    )
    op.create_index("ix_league_transactions_id", "league_transactions", ["id"], unique=False)
    op.create_index(
        "ix_league_transactions_league_id",
        "league_transactions",
        ["league_id"],
        unique=False,
    )

    op.create_table(
        "app_settings",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("football_data_api_key_enc", sa.Text(), nullable=True),
        sa.Column("api_football_api_key_enc", sa.Text(), nullable=True),
        sa.Column(
            "updated_at_utc",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_index("ix_league_transactions_league_id", table_name="league_transactions")
    op.drop_index("ix_league_transactions_id", table_name="league_transactions")
    op.drop_table("league_transactions")
