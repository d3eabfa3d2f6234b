# rentledger/services/payment_recorder.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from ..domain.enums import CollectionMethod, LandlordPaymentMethod, is_terminal
from ..domain.errors import LeaseClosedError
from ..domain.ledger_status import derive_payment_status
from ..domain.money import ZERO, non_negative_money
from ..models import RentLedgerEntry
from .ledger_store import get_or_create_entry, normalize_month
from .lease_registry import must_get_lease
from .lease_rules import as_field_map, coerce_enum
from .txn import commit_or_raise

log = logging.getLogger("rentledger.ledger")


def _today() -> date:
    return date.today()


@dataclass(frozen=True)
class PaymentValues:
    amount_collected_from_tenant: Decimal
    collection_method: str
    amount_paid_to_landlord: Decimal
    landlord_payment_method: str
    notes: Optional[str]


def payment_values(payment: Any) -> PaymentValues:
    """
    Validate a payment submission. It is the full intended state for the
    month, not a delta: omitted amounts mean 0, omitted methods fall back to
    cash / check.
    """
    data = as_field_map(payment)

    collected = data.get("amount_collected_from_tenant")
    paid = data.get("amount_paid_to_landlord")
    notes = data.get("notes")

    return PaymentValues(
        amount_collected_from_tenant=non_negative_money(
            ZERO if collected is None else collected, field="amount_collected_from_tenant"
        ),
        collection_method=coerce_enum(
            CollectionMethod, data.get("collection_method") or CollectionMethod.CASH, field="collection_method"
        ),
        amount_paid_to_landlord=non_negative_money(
            ZERO if paid is None else paid, field="amount_paid_to_landlord"
        ),
        landlord_payment_method=coerce_enum(
            LandlordPaymentMethod,
            data.get("landlord_payment_method") or LandlordPaymentMethod.CHECK,
            field="landlord_payment_method",
        ),
        notes=(str(notes).strip() or None) if notes is not None else None,
    )


def record_payment(db: Session, lease_id: str, month: Any, payment: Any) -> RentLedgerEntry:
    """
    Write the month's collection/landlord payment and re-derive paid flags.

    Single read-modify-write: the entry is fetched (or inserted) under a row
    lock, updated, and committed once. Concurrent writers for the same month
    land on the same row; the last commit wins.
    """
    values = payment_values(payment)
    m = normalize_month(month)

    lease = must_get_lease(db, lease_id)
    if is_terminal(lease.status):
        raise LeaseClosedError(lease.id, lease.status)

    entry = get_or_create_entry(db, lease.id, m, lock=True, commit=False)

    status = derive_payment_status(
        rent_due_from_tenant=entry.rent_due_from_tenant,
        rent_due_to_landlord=entry.rent_due_to_landlord,
        amount_collected_from_tenant=values.amount_collected_from_tenant,
        amount_paid_to_landlord=values.amount_paid_to_landlord,
        today=_today(),
    )

    entry.amount_collected_from_tenant = values.amount_collected_from_tenant
    entry.collection_method = values.collection_method
    entry.amount_paid_to_landlord = values.amount_paid_to_landlord
    entry.landlord_payment_method = values.landlord_payment_method
    entry.notes = values.notes
    entry.collection_date = status.collection_date
    entry.landlord_payment_date = status.landlord_payment_date
    entry.tenant_paid = status.tenant_paid
    entry.landlord_paid = status.landlord_paid

    db.add(entry)
    commit_or_raise(db, op="ledger.record_payment", lease_id=lease.id, ledger_month=m.isoformat())

    log.info(
        "ledger.payment_recorded",
        extra={
            "lease_id": lease.id,
            "entry_id": entry.id,
            "ledger_month": m.isoformat(),
            "tenant_paid": entry.tenant_paid,
            "landlord_paid": entry.landlord_paid,
        },
    )
    return entry
