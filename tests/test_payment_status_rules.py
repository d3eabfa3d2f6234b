# tests/test_payment_status_rules.py
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from rentledger.domain.errors import LeaseValidationError
from rentledger.domain.ledger_status import derive_payment_status, outstanding
from rentledger.domain.money import compute_tenant_pays, non_negative_money, to_money

TODAY = date(2025, 1, 15)


def _status(collected, paid, due_tenant="900", due_landlord="1200"):
    return derive_payment_status(
        rent_due_from_tenant=Decimal(due_tenant),
        rent_due_to_landlord=Decimal(due_landlord),
        amount_collected_from_tenant=Decimal(collected),
        amount_paid_to_landlord=Decimal(paid),
        today=TODAY,
    )


def test_exact_payment_counts_as_paid():
    s = _status("900", "1200")
    assert s.tenant_paid is True
    assert s.landlord_paid is True
    assert s.collection_date == TODAY
    assert s.landlord_payment_date == TODAY


def test_partial_payment_is_unpaid_but_dated():
    s = _status("500", "0")
    assert s.tenant_paid is False
    assert s.collection_date == TODAY
    assert s.landlord_paid is False
    assert s.landlord_payment_date is None


def test_overpayment_is_paid():
    s = _status("950", "1300")
    assert s.tenant_paid and s.landlord_paid


def test_zero_due_is_paid_with_nothing_collected():
    s = _status("0", "0", due_tenant="0", due_landlord="0")
    assert s.tenant_paid is True
    assert s.collection_date is None


def test_outstanding_never_negative():
    assert outstanding(Decimal("900"), Decimal("500")) == Decimal("400")
    assert outstanding(Decimal("900"), Decimal("1000")) == Decimal("0")


def test_tenant_pays_not_clamped():
    assert compute_tenant_pays(Decimal("1200"), Decimal("300")) == Decimal("900.00")
    assert compute_tenant_pays(Decimal("500"), Decimal("650")) == Decimal("-150.00")


def test_money_coercion():
    assert to_money(0.1, field="x") == Decimal("0.10")
    assert to_money("1200.005", field="x") == Decimal("1200.01")
    with pytest.raises(LeaseValidationError) as ei:
        non_negative_money("-1", field="monthly_rent")
    assert ei.value.field == "monthly_rent"
    with pytest.raises(LeaseValidationError):
        to_money("abc", field="x")
    with pytest.raises(LeaseValidationError):
        to_money(True, field="x")

    assert to_money("9999999999.99", field="x") == Decimal("9999999999.99")
    for huge in (Decimal("1e30"), "1e30", "10000000000"):
        with pytest.raises(LeaseValidationError) as ei:
            to_money(huge, field="monthly_rent")
        assert ei.value.field == "monthly_rent"
        assert "exceeds" in ei.value.message
