"""init schema: leases + rent_ledger

Revision ID: 0001_init
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "leases",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("household_id", sa.String(length=36), nullable=True),
        sa.Column("unit_id", sa.String(length=36), nullable=True),
        sa.Column("lease_type", sa.String(length=20), nullable=False, server_default="direct"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("monthly_rent", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("subsidy_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("tenant_pays", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("program_month", sa.Integer(), nullable=True),
        sa.Column("total_program_months", sa.Integer(), nullable=True, server_default="24"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("monthly_rent >= 0", name="ck_leases_monthly_rent_nonneg"),
        sa.CheckConstraint("subsidy_amount >= 0", name="ck_leases_subsidy_nonneg"),
        sa.CheckConstraint(
            "end_date IS NULL OR start_date IS NULL OR end_date >= start_date", name="ck_leases_dates"
        ),
    )
    op.create_index("ix_leases_household_id", "leases", ["household_id"])
    op.create_index("ix_leases_unit_id", "leases", ["unit_id"])
    op.create_index("ix_leases_status", "leases", ["status"])

    op.create_table(
        "rent_ledger",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "lease_id", sa.String(length=36), sa.ForeignKey("leases.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("ledger_month", sa.Date(), nullable=False),
        sa.Column("rent_due_from_tenant", sa.Numeric(12, 2), nullable=False),
        sa.Column("rent_due_to_landlord", sa.Numeric(12, 2), nullable=False),
        sa.Column("amount_collected_from_tenant", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("collection_date", sa.Date(), nullable=True),
        sa.Column("collection_method", sa.String(length=20), nullable=True),
        sa.Column("amount_paid_to_landlord", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("landlord_payment_date", sa.Date(), nullable=True),
        sa.Column("landlord_payment_method", sa.String(length=20), nullable=True),
        sa.Column("tenant_paid", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("landlord_paid", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("lease_id", "ledger_month", name="uq_rent_ledger_lease_month"),
        sa.CheckConstraint("amount_collected_from_tenant >= 0", name="ck_rent_ledger_collected_nonneg"),
        sa.CheckConstraint("amount_paid_to_landlord >= 0", name="ck_rent_ledger_paid_nonneg"),
    )
    op.create_index("ix_rent_ledger_lease_id", "rent_ledger", ["lease_id"])


def downgrade():
    op.drop_index("ix_rent_ledger_lease_id", table_name="rent_ledger")
    op.drop_table("rent_ledger")
    op.drop_index("ix_leases_status", table_name="leases")
    op.drop_index("ix_leases_unit_id", table_name="leases")
    op.drop_index("ix_leases_household_id", table_name="leases")
    op.drop_table("leases")
