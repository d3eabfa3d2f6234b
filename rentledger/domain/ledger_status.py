# rentledger/domain/ledger_status.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from .money import ZERO


@dataclass(frozen=True)
class PaymentStatus:
    tenant_paid: bool
    landlord_paid: bool
    collection_date: Optional[date]
    landlord_payment_date: Optional[date]


def derive_payment_status(
    *,
    rent_due_from_tenant: Decimal,
    rent_due_to_landlord: Decimal,
    amount_collected_from_tenant: Decimal,
    amount_paid_to_landlord: Decimal,
    today: date,
) -> PaymentStatus:
    """
    Flags compare against the entry's snapshotted dues, never the lease's
    current rent. A payment date is stamped only when money actually moved.
    """
    return PaymentStatus(
        tenant_paid=amount_collected_from_tenant >= rent_due_from_tenant,
        landlord_paid=amount_paid_to_landlord >= rent_due_to_landlord,
        collection_date=today if amount_collected_from_tenant > ZERO else None,
        landlord_payment_date=today if amount_paid_to_landlord > ZERO else None,
    )


def outstanding(due: Decimal, paid: Decimal) -> Decimal:
    return max(ZERO, due - paid)
