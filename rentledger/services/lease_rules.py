# rentledger/services/lease_rules.py
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Type

from ..domain.enums import LeaseStatus, LeaseType
from ..domain.errors import LeaseValidationError
from ..domain.money import non_negative_money

# fields LeaseMutator may change
MUTABLE_LEASE_FIELDS = frozenset(
    {
        "monthly_rent",
        "subsidy_amount",
        "start_date",
        "end_date",
        "status",
        "lease_type",
        "notes",
        "program_month",
        "total_program_months",
    }
)

# set once at creation (or derived); never through an update
IMMUTABLE_LEASE_FIELDS = frozenset(
    {"id", "household_id", "unit_id", "tenant_pays", "created_at", "updated_at"}
)


def as_field_map(payload: Any) -> dict[str, Any]:
    """Plain dict from a mapping or a pydantic model (only the fields the caller set)."""
    if isinstance(payload, Mapping):
        return dict(payload)
    return payload.model_dump(exclude_unset=True)


def _as_date(v: Any, *, field: str) -> Optional[date]:
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        try:
            return date.fromisoformat(v.strip()[:10])
        except ValueError:
            raise LeaseValidationError(field, f"invalid date {v!r}; expected YYYY-MM-DD")
    raise LeaseValidationError(field, "must be a date")


def coerce_enum(enum_cls: Type[Enum], v: Any, *, field: str) -> str:
    if v is None:
        raise LeaseValidationError(field, "is required")
    try:
        return enum_cls(v.value if isinstance(v, Enum) else v).value
    except ValueError:
        allowed = "|".join(m.value for m in enum_cls)
        raise LeaseValidationError(field, f"must be one of {allowed}, got {v!r}")


def positive_int_or_none(v: Any, *, field: str) -> Optional[int]:
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, int):
        raise LeaseValidationError(field, "must be a whole number")
    if v <= 0:
        raise LeaseValidationError(field, "must be > 0")
    return v


def _clean_notes(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def ensure_dates_ordered(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise LeaseValidationError("end_date", "lease end_date cannot be before start_date")


def normalize_lease_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate and coerce a partial set of lease fields.

    Only single-field checks happen here; cross-field rules (date ordering
    against stored values, terminal-state freeze) need the current row.
    """
    out: dict[str, Any] = {}
    for k, v in fields.items():
        if k in IMMUTABLE_LEASE_FIELDS:
            raise LeaseValidationError(k, "cannot be changed")
        if k not in MUTABLE_LEASE_FIELDS:
            raise LeaseValidationError(k, "unknown lease field")

        if k in ("monthly_rent", "subsidy_amount"):
            out[k] = non_negative_money(v, field=k)
        elif k in ("start_date", "end_date"):
            out[k] = _as_date(v, field=k)
        elif k == "status":
            out[k] = coerce_enum(LeaseStatus, v, field=k)
        elif k == "lease_type":
            out[k] = coerce_enum(LeaseType, v, field=k)
        elif k in ("program_month", "total_program_months"):
            out[k] = positive_int_or_none(v, field=k)
        else:
            out[k] = _clean_notes(v)
    return out
