# tests/test_ledger_store.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from rentledger.db import SessionLocal
from rentledger.domain.errors import LeaseClosedError, LeaseValidationError, NotFoundError
from rentledger.models import RentLedgerEntry
from rentledger.services import ledger_store
from rentledger.services.ledger_store import get_or_create_entry, list_entries, normalize_month
from rentledger.services.lease_mutator import update_lease
from rentledger.services.lease_registry import delete_lease


def _count(db, lease_id: str, month: date | None = None) -> int:
    q = select(func.count()).select_from(RentLedgerEntry).where(RentLedgerEntry.lease_id == lease_id)
    if month is not None:
        q = q.where(RentLedgerEntry.ledger_month == month)
    return int(db.scalar(q))


def test_normalize_month_variants():
    assert normalize_month("2025-01") == date(2025, 1, 1)
    assert normalize_month("2025-01-31") == date(2025, 1, 1)
    assert normalize_month(date(2025, 2, 14)) == date(2025, 2, 1)
    assert normalize_month(datetime(2025, 12, 31, 23, 59)) == date(2025, 12, 1)
    with pytest.raises(LeaseValidationError):
        normalize_month("2025-13")
    with pytest.raises(LeaseValidationError):
        normalize_month("January")


def test_new_entry_is_zero_valued_snapshot(db, make_lease):
    lease = make_lease()
    e = get_or_create_entry(db, lease.id, date(2025, 1, 20))

    assert e.ledger_month == date(2025, 1, 1)
    assert e.rent_due_from_tenant == Decimal("900")
    assert e.rent_due_to_landlord == Decimal("1200")
    assert e.amount_collected_from_tenant == Decimal("0")
    assert e.amount_paid_to_landlord == Decimal("0")
    assert e.collection_date is None
    assert e.landlord_payment_date is None
    assert e.tenant_paid is False
    assert e.landlord_paid is False


def test_get_or_create_is_idempotent(db, make_lease):
    lease = make_lease()
    a = get_or_create_entry(db, lease.id, "2025-03")
    b = get_or_create_entry(db, lease.id, "2025-03-15")
    assert a.id == b.id
    assert _count(db, lease.id, date(2025, 3, 1)) == 1


def test_lost_insert_race_returns_existing_row(db, make_lease, monkeypatch):
    lease = make_lease()
    first = get_or_create_entry(db, lease.id, "2025-04")

    # simulate a second session whose lookup ran before the first insert committed
    real_find = ledger_store._find_entry
    calls = {"n": 0}

    def stale_find(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_find(*args, **kwargs)

    monkeypatch.setattr(ledger_store, "_find_entry", stale_find)

    second = get_or_create_entry(db, lease.id, "2025-04")
    assert second.id == first.id
    assert calls["n"] == 2
    assert _count(db, lease.id, date(2025, 4, 1)) == 1


def test_unknown_lease_not_found(db):
    with pytest.raises(NotFoundError):
        get_or_create_entry(db, "missing", "2025-01")


def test_closed_lease_keeps_history_but_opens_no_new_months(db, make_lease):
    lease = make_lease()
    jan = get_or_create_entry(db, lease.id, "2025-01")
    update_lease(db, lease.id, {"status": "completed"})

    assert get_or_create_entry(db, lease.id, "2025-01").id == jan.id
    with pytest.raises(LeaseClosedError):
        get_or_create_entry(db, lease.id, "2025-02")
    assert [e.id for e in list_entries(db, lease.id)] == [jan.id]


def test_list_entries_newest_first(db, make_lease):
    lease = make_lease()
    for m in ("2025-01", "2025-03", "2025-02"):
        get_or_create_entry(db, lease.id, m)

    months = [e.ledger_month for e in list_entries(db, lease.id)]
    assert months == [date(2025, 3, 1), date(2025, 2, 1), date(2025, 1, 1)]


def test_lease_delete_cascades_to_ledger(db, make_lease):
    lease = make_lease()
    get_or_create_entry(db, lease.id, "2025-01")
    get_or_create_entry(db, lease.id, "2025-02")
    lease_id = lease.id

    delete_lease(db, lease_id)

    other = SessionLocal()
    try:
        assert _count(other, lease_id) == 0
    finally:
        other.close()
