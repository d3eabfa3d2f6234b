# rentledger/models.py
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base
from .domain.enums import CollectionMethod, LandlordPaymentMethod, LeaseStatus, LeaseType

MONEY = Numeric(12, 2)


def _uuid() -> str:
    return str(uuid.uuid4())


class Lease(Base):
    __tablename__ = "leases"
    __table_args__ = (
        CheckConstraint("monthly_rent >= 0", name="ck_leases_monthly_rent_nonneg"),
        CheckConstraint("subsidy_amount >= 0", name="ck_leases_subsidy_nonneg"),
        CheckConstraint("end_date IS NULL OR start_date IS NULL OR end_date >= start_date", name="ck_leases_dates"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)

    # owned by the household/unit services; opaque here
    household_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    unit_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)

    lease_type: Mapped[str] = mapped_column(String(20), nullable=False, default=LeaseType.DIRECT.value)  # direct|sublease|bridge
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=LeaseStatus.PENDING.value, index=True
    )  # pending|active|completed|terminated

    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    monthly_rent: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))
    subsidy_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))
    # derived: monthly_rent - subsidy_amount, written by lease_mutator / lease_registry only
    tenant_pays: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))

    program_month: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_program_months: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=24)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    ledger_entries: Mapped[List["RentLedgerEntry"]] = relationship(
        back_populates="lease",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RentLedgerEntry.ledger_month.desc()",
    )


class RentLedgerEntry(Base):
    __tablename__ = "rent_ledger"
    __table_args__ = (
        UniqueConstraint("lease_id", "ledger_month", name="uq_rent_ledger_lease_month"),
        CheckConstraint("amount_collected_from_tenant >= 0", name="ck_rent_ledger_collected_nonneg"),
        CheckConstraint("amount_paid_to_landlord >= 0", name="ck_rent_ledger_paid_nonneg"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    lease_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("leases.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # always the 1st of the month
    ledger_month: Mapped[date] = mapped_column(Date, nullable=False)

    # snapshots of the lease at creation time
    rent_due_from_tenant: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    rent_due_to_landlord: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    amount_collected_from_tenant: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))
    collection_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    collection_method: Mapped[Optional[str]] = mapped_column(
        String(20), nullable=True, default=CollectionMethod.CASH.value
    )  # cash|check|bank_transfer

    amount_paid_to_landlord: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))
    landlord_payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    landlord_payment_method: Mapped[Optional[str]] = mapped_column(
        String(20), nullable=True, default=LandlordPaymentMethod.CHECK.value
    )  # check|ach|wire

    tenant_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    landlord_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    lease: Mapped["Lease"] = relationship(back_populates="ledger_entries")
