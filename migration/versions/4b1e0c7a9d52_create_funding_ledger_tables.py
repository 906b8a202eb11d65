"""create funding ledger tables

Revision ID: 4b1e0c7a9d52
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "4b1e0c7a9d52"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "funding_instruments",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("chapter", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=True),
        sa.Column("motivation", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_funding_instruments_chapter", "funding_instruments", ["chapter"], unique=False)

    op.create_table(
        "work_orders",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("order_number", sa.String(length=64), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("PLANNING", "CONTRACTED", "PAID", name="workorderstatus"),
            nullable=False,
        ),
        sa.Column("estimated_value", sa.Float(), nullable=True),
        sa.Column("contract_value", sa.Float(), nullable=True),
        sa.Column("paid_value", sa.Float(), nullable=True),
        sa.Column("contractor", sa.String(), nullable=True),
        sa.Column("contract_date", sa.Date(), nullable=True),
        sa.Column("paid_on", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_work_orders_created_at", "work_orders", ["created_at"], unique=False)

    op.create_table(
        "work_order_funding_links",
        sa.Column("order_id", sa.String(), nullable=False),
        sa.Column("instrument_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["order_id"], ["work_orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["instrument_id"], ["funding_instruments.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("order_id", "instrument_id"),
    )
    op.create_index(
        "idx_funding_links_instrument_id", "work_order_funding_links", ["instrument_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("idx_funding_links_instrument_id", table_name="work_order_funding_links")
    op.drop_table("work_order_funding_links")
    op.drop_index("idx_work_orders_created_at", table_name="work_orders")
    op.drop_table("work_orders")
    op.drop_index("idx_funding_instruments_chapter", table_name="funding_instruments")
    op.drop_table("funding_instruments")
