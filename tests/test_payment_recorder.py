# tests/test_payment_recorder.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from rentledger.db import SessionLocal
from rentledger.domain.errors import LeaseClosedError, LeaseValidationError
from rentledger.models import RentLedgerEntry
from rentledger.schemas import PaymentIn
from rentledger.services import payment_recorder
from rentledger.services.ledger_store import get_or_create_entry
from rentledger.services.lease_mutator import update_lease
from rentledger.services.payment_recorder import record_payment

PAY_DAY = date(2025, 1, 10)


@pytest.fixture(autouse=True)
def _fixed_today(monkeypatch):
    monkeypatch.setattr(payment_recorder, "_today", lambda: PAY_DAY)


def _payment(**kw):
    base = {
        "amount_collected_from_tenant": 0,
        "collection_method": "cash",
        "amount_paid_to_landlord": 0,
        "landlord_payment_method": "check",
        "notes": None,
    }
    base.update(kw)
    return base


def test_full_tenant_payment_marks_paid(db, make_lease):
    lease = make_lease()
    assert lease.tenant_pays == Decimal("900")

    e = record_payment(db, lease.id, "2025-01", _payment(amount_collected_from_tenant=900))

    assert e.tenant_paid is True
    assert e.collection_date == PAY_DAY
    assert e.landlord_paid is False
    assert e.landlord_payment_date is None


def test_partial_payment_is_stored_not_rejected(db, make_lease):
    lease = make_lease()
    e = record_payment(db, lease.id, "2025-01", _payment(amount_collected_from_tenant=500))

    assert e.tenant_paid is False
    assert e.amount_collected_from_tenant == Decimal("500")
    assert e.collection_date == PAY_DAY


def test_landlord_side_uses_snapshot_due(db, make_lease):
    lease = make_lease()
    get_or_create_entry(db, lease.id, "2025-01")
    update_lease(db, lease.id, {"monthly_rent": 1500})

    # the January entry still owes the landlord 1200
    e = record_payment(
        db, lease.id, "2025-01", _payment(amount_paid_to_landlord=1200, landlord_payment_method="ach")
    )
    assert e.rent_due_to_landlord == Decimal("1200")
    assert e.landlord_paid is True
    assert e.landlord_payment_date == PAY_DAY
    assert e.landlord_payment_method == "ach"


def test_zeroing_a_payment_clears_dates_and_flags(db, make_lease):
    lease = make_lease()
    record_payment(db, lease.id, "2025-01", _payment(amount_collected_from_tenant=900, amount_paid_to_landlord=1200))
    e = record_payment(db, lease.id, "2025-01", _payment())

    assert e.tenant_paid is False
    assert e.landlord_paid is False
    assert e.collection_date is None
    assert e.landlord_payment_date is None


def test_negative_amount_rejected_before_any_write(db, make_lease):
    lease = make_lease()
    with pytest.raises(LeaseValidationError) as ei:
        record_payment(db, lease.id, "2025-05", _payment(amount_paid_to_landlord=-1))
    assert ei.value.field == "amount_paid_to_landlord"

    n = db.scalar(select(func.count()).select_from(RentLedgerEntry).where(RentLedgerEntry.lease_id == lease.id))
    assert n == 0


def test_bad_method_rejected(db, make_lease):
    lease = make_lease()
    with pytest.raises(LeaseValidationError) as ei:
        record_payment(db, lease.id, "2025-05", _payment(collection_method="venmo"))
    assert ei.value.field == "collection_method"


def test_accepts_payment_schema_and_defaults(db, make_lease):
    lease = make_lease()
    e = record_payment(db, lease.id, "2025-06", PaymentIn(amount_collected_from_tenant=Decimal("900"), notes="  "))
    assert e.collection_method == "cash"
    assert e.landlord_payment_method == "check"
    assert e.notes is None
    assert e.tenant_paid is True


def test_negative_tenant_share_is_paid_with_nothing_collected(db, make_lease):
    lease = make_lease(monthly_rent=500, subsidy_amount=650)
    e = record_payment(db, lease.id, "2025-01", _payment())
    assert e.rent_due_from_tenant == Decimal("-150")
    assert e.tenant_paid is True


def test_closed_lease_rejects_payments(db, make_lease):
    lease = make_lease()
    update_lease(db, lease.id, {"status": "terminated"})
    with pytest.raises(LeaseClosedError):
        record_payment(db, lease.id, "2025-01", _payment(amount_collected_from_tenant=900))


def test_two_sessions_same_month_last_write_wins(make_lease):
    lease = make_lease()
    s1 = SessionLocal()
    s2 = SessionLocal()
    try:
        e1 = get_or_create_entry(s1, lease.id, "2025-02")
        e2 = get_or_create_entry(s2, lease.id, "2025-02")
        assert e1.id == e2.id

        record_payment(s1, lease.id, "2025-02", _payment(amount_collected_from_tenant=400, notes="first"))
        last = record_payment(s2, lease.id, "2025-02", _payment(amount_collected_from_tenant=900, notes="second"))
        assert last.id == e1.id
    finally:
        s1.close()
        s2.close()

    check = SessionLocal()
    try:
        rows = check.scalars(
            select(RentLedgerEntry).where(
                RentLedgerEntry.lease_id == lease.id,
                RentLedgerEntry.ledger_month == date(2025, 2, 1),
            )
        ).all()
        assert len(rows) == 1
        assert rows[0].amount_collected_from_tenant == Decimal("900")
        assert rows[0].notes == "second"
        assert rows[0].tenant_paid is True
    finally:
        check.close()
