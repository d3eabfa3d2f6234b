# rentledger/domain/money.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from .errors import LeaseValidationError

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
# largest value a Numeric(12, 2) column holds
MONEY_MAX = Decimal("9999999999.99")


def to_money(v: Any, *, field: str) -> Decimal:
    """
    Coerce to a 2-place Decimal. Floats go through str() so 0.1 stays 0.10.
    Sub-cent input rounds half up. Raises LeaseValidationError for anything
    non-numeric or outside +/- MONEY_MAX.
    """
    if v is None:
        raise LeaseValidationError(field, "is required")
    if isinstance(v, bool):
        raise LeaseValidationError(field, "must be a number")
    try:
        d = v if isinstance(v, Decimal) else Decimal(str(v))
    except (InvalidOperation, ValueError):
        raise LeaseValidationError(field, "must be a number")
    if not d.is_finite():
        raise LeaseValidationError(field, "must be a finite number")
    if abs(d) >= MONEY_MAX + CENTS / 2:
        raise LeaseValidationError(field, f"exceeds {MONEY_MAX}")
    try:
        return d.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise LeaseValidationError(field, "must be a number")


def non_negative_money(v: Any, *, field: str) -> Decimal:
    d = to_money(v, field=field)
    if d < ZERO:
        raise LeaseValidationError(field, "must be >= 0")
    return d


def money_or_zero(v: Optional[Any]) -> Decimal:
    if v is None:
        return ZERO
    return to_money(v, field="amount")


def compute_tenant_pays(monthly_rent: Any, subsidy_amount: Any) -> Decimal:
    # not clamped: a subsidy above rent yields a negative tenant share
    return money_or_zero(monthly_rent) - money_or_zero(subsidy_amount)
