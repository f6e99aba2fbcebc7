"""initial

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # SQLite would coerce NUMERIC text to REAL; store exact decimal text there.
    if op.get_bind().dialect.name == "sqlite":
        money = sa.String(40)
    else:
        money = sa.Numeric(20, 8)

    op.create_table(
        "online_wallet_entries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("sequence", sa.Integer, nullable=False),
        sa.Column("amount", money, nullable=False),
        sa.Column("balance_before", money, nullable=False),
        sa.Column("event_time", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ux_online_wallet_entries_sequence",
        "online_wallet_entries",
        ["sequence"],
        unique=True,
    )


def downgrade():
    op.drop_index("ux_online_wallet_entries_sequence", table_name="online_wallet_entries")
    op.drop_table("online_wallet_entries")
