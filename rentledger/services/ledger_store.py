# rentledger/services/ledger_store.py
"""
One rent_ledger row per (lease_id, ledger_month).

The uniqueness constraint uq_rent_ledger_lease_month is the guarantee; this
module never relies on callers serializing themselves. A lost insert race is
absorbed by rolling back a savepoint and re-reading the winner's row.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..domain.enums import CollectionMethod, LandlordPaymentMethod, is_terminal
from ..domain.errors import LeaseClosedError, LeaseValidationError
from ..domain.money import ZERO, money_or_zero
from ..models import Lease, RentLedgerEntry
from .lease_registry import must_get_lease
from .txn import commit_or_raise

log = logging.getLogger("rentledger.ledger")


def normalize_month(value: Any) -> date:
    """date / datetime / 'YYYY-MM' / 'YYYY-MM-DD' -> first day of that month."""
    if isinstance(value, datetime):
        return date(value.year, value.month, 1)
    if isinstance(value, date):
        return date(value.year, value.month, 1)
    if isinstance(value, str):
        s = value.strip()
        try:
            if len(s) == 7:
                y, m = [int(x) for x in s.split("-")]
                return date(y, m, 1)
            d = date.fromisoformat(s[:10])
            return date(d.year, d.month, 1)
        except ValueError:
            pass
    raise LeaseValidationError("ledger_month", f"invalid month {value!r}; expected YYYY-MM")


def _find_entry(db: Session, lease_id: str, month: date, *, lock: bool = False) -> Optional[RentLedgerEntry]:
    q = select(RentLedgerEntry).where(
        RentLedgerEntry.lease_id == lease_id,
        RentLedgerEntry.ledger_month == month,
    )
    if lock:
        q = q.with_for_update()
    return db.scalar(q.execution_options(populate_existing=True))


def _insert_or_fetch(db: Session, lease: Lease, month: date) -> RentLedgerEntry:
    entry = RentLedgerEntry(
        lease_id=lease.id,
        ledger_month=month,
        rent_due_from_tenant=money_or_zero(lease.tenant_pays),
        rent_due_to_landlord=money_or_zero(lease.monthly_rent),
        amount_collected_from_tenant=ZERO,
        amount_paid_to_landlord=ZERO,
        collection_method=CollectionMethod.CASH.value,
        landlord_payment_method=LandlordPaymentMethod.CHECK.value,
        tenant_paid=False,
        landlord_paid=False,
    )

    savepoint = db.begin_nested()
    try:
        db.add(entry)
        db.flush()
        savepoint.commit()
    except IntegrityError:
        # another session inserted this month first; its row wins
        savepoint.rollback()
        log.info(
            "ledger.entry_insert_race",
            extra={"lease_id": lease.id, "ledger_month": month.isoformat()},
        )
        winner = _find_entry(db, lease.id, month, lock=True)
        if winner is None:
            raise
        return winner

    log.info(
        "ledger.entry_created",
        extra={"lease_id": lease.id, "entry_id": entry.id, "ledger_month": month.isoformat()},
    )
    return entry


def get_or_create_entry(
    db: Session,
    lease_id: str,
    month: Any,
    *,
    lock: bool = False,
    commit: bool = True,
) -> RentLedgerEntry:
    """
    Return the ledger entry for (lease, month), materializing it on first use.

    A new entry snapshots the lease's current tenant_pays and monthly_rent as
    its dues. Calling this repeatedly for the same key yields the same row.
    With commit=False the caller owns the transaction (PaymentRecorder does).
    """
    m = normalize_month(month)
    lease = must_get_lease(db, lease_id)

    entry = _find_entry(db, lease.id, m, lock=lock)
    if entry is None:
        if is_terminal(lease.status):
            raise LeaseClosedError(
                lease.id,
                lease.status,
                f"lease {lease.id} is {lease.status}; no ledger entry exists for {m:%Y-%m}",
            )
        entry = _insert_or_fetch(db, lease, m)

    # also ends a read-only transaction so its locks are not held across requests
    if commit:
        commit_or_raise(db, op="ledger.get_or_create", lease_id=lease.id, ledger_month=m.isoformat())
    return entry


def list_entries(db: Session, lease_id: str) -> list[RentLedgerEntry]:
    lease = must_get_lease(db, lease_id)
    q = (
        select(RentLedgerEntry)
        .where(RentLedgerEntry.lease_id == lease.id)
        .order_by(desc(RentLedgerEntry.ledger_month))
    )
    return list(db.scalars(q).all())
