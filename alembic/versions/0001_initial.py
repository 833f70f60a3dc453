"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "servers",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("cost_per_active", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_servers_id", "servers", ["id"], unique=False)
    op.create_index("ix_servers_name", "servers", ["name"], unique=False)

    op.create_table(
        "plans",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("months", sa.Integer(), nullable=False),
        sa.Column("default_price", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_plans_id", "plans", ["id"], unique=False)

    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(length=64), nullable=False),
        sa.Column("value", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("server_id", sa.String(length=64), nullable=False),
        sa.Column("plan_id", sa.String(length=64), nullable=False),
        sa.Column("amount_paid", sa.Float(), nullable=False),
        sa.Column("due_date", sa.String(length=32), nullable=False),
        sa.Column("last_notified_date", sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customers_id", "customers", ["id"], unique=False)
    op.create_index("ix_customers_name", "customers", ["name"], unique=False)
    op.create_index("ix_customers_server_id", "customers", ["server_id"], unique=False)
    op.create_index("ix_customers_due_date", "customers", ["due_date"], unique=False)

    op.create_table(
        "renewals",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("customer_id", sa.String(length=64), nullable=False),
        sa.Column("server_id", sa.String(length=64), nullable=False),
        sa.Column("plan_id", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_renewals_id", "renewals", ["id"], unique=False)
    op.create_index("ix_renewals_customer_id", "renewals", ["customer_id"], unique=False)
    op.create_index("ix_renewals_server_id", "renewals", ["server_id"], unique=False)
    op.create_index("ix_renewals_date", "renewals", ["date"], unique=False)

    op.create_table(
        "manual_additions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_manual_additions_id", "manual_additions", ["id"], unique=False)
    op.create_index("ix_manual_additions_date", "manual_additions", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_manual_additions_date", table_name="manual_additions")
    op.drop_index("ix_manual_additions_id", table_name="manual_additions")
    op.drop_table("manual_additions")
    op.drop_index("ix_renewals_date", table_name="renewals")
    op.drop_index("ix_renewals_server_id", table_name="renewals")
    op.drop_index("ix_renewals_customer_id", table_name="renewals")
    op.drop_index("ix_renewals_id", table_name="renewals")
    op.drop_table("renewals")
    op.drop_index("ix_customers_due_date", table_name="customers")
    op.drop_index("ix_customers_server_id", table_name="customers")
    op.drop_index("ix_customers_name", table_name="customers")
    op.drop_index("ix_customers_id", table_name="customers")
    op.drop_table("customers")
    op.drop_table("app_settings")
    op.drop_index("ix_plans_id", table_name="plans")
    op.drop_table("plans")
    op.drop_index("ix_servers_name", table_name="servers")
    op.drop_index("ix_servers_id", table_name="servers")
    op.drop_table("servers")
