# rentledger/schemas.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .domain.enums import (
    CollectionMethod,
    LandlordPaymentMethod,
    LeaseStatus,
    LeaseType,
    lease_type_label,
)
from .domain.ledger_status import outstanding
from .domain.progress import bridge_progress


# -------------------- Leases --------------------

class LeaseCreate(BaseModel):
    household_id: Optional[str] = None
    unit_id: Optional[str] = None
    lease_type: LeaseType = LeaseType.DIRECT
    status: LeaseStatus = LeaseStatus.PENDING
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    monthly_rent: Decimal = Field(default=Decimal("0"), ge=0)
    subsidy_amount: Decimal = Field(default=Decimal("0"), ge=0)
    program_month: Optional[int] = Field(default=None, gt=0)
    total_program_months: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = None


class LeaseUpdate(BaseModel):
    """
    PATCH body. Only fields the client sends are applied (exclude_unset);
    identity fields and tenant_pays are rejected by extra="forbid".
    """

    model_config = ConfigDict(extra="forbid")

    monthly_rent: Optional[Decimal] = Field(default=None, ge=0)
    subsidy_amount: Optional[Decimal] = Field(default=None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[LeaseStatus] = None
    lease_type: Optional[LeaseType] = None
    program_month: Optional[int] = Field(default=None, gt=0)
    total_program_months: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = None


class LeaseOut(BaseModel):
    id: str
    household_id: Optional[str] = None
    unit_id: Optional[str] = None
    lease_type: str
    status: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    monthly_rent: Decimal
    subsidy_amount: Decimal
    tenant_pays: Decimal
    program_month: Optional[int] = None
    total_program_months: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lease_type_label(self) -> str:
        return lease_type_label(self.lease_type)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def program_progress(self) -> Optional[int]:
        return bridge_progress(self)


class PortfolioSummaryOut(BaseModel):
    total_leases: int
    active_leases: int
    bridge_leases: int
    monthly_tenant_revenue: Decimal
    model_config = ConfigDict(from_attributes=True)


# -------------------- Rent ledger --------------------

class PaymentIn(BaseModel):
    amount_collected_from_tenant: Decimal = Field(default=Decimal("0"), ge=0)
    collection_method: CollectionMethod = CollectionMethod.CASH
    amount_paid_to_landlord: Decimal = Field(default=Decimal("0"), ge=0)
    landlord_payment_method: LandlordPaymentMethod = LandlordPaymentMethod.CHECK
    notes: Optional[str] = None


class LedgerEntryOut(BaseModel):
    id: str
    lease_id: str
    ledger_month: date
    rent_due_from_tenant: Decimal
    rent_due_to_landlord: Decimal
    amount_collected_from_tenant: Decimal
    collection_date: Optional[date] = None
    collection_method: Optional[str] = None
    amount_paid_to_landlord: Decimal
    landlord_payment_date: Optional[date] = None
    landlord_payment_method: Optional[str] = None
    tenant_paid: bool
    landlord_paid: bool
    notes: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tenant_balance(self) -> Decimal:
        return outstanding(self.rent_due_from_tenant, self.amount_collected_from_tenant)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def landlord_balance(self) -> Decimal:
        return outstanding(self.rent_due_to_landlord, self.amount_paid_to_landlord)
