# rentledger/services/lease_registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.enums import LeaseStatus, LeaseType
from ..domain.errors import LeaseValidationError, NotFoundError
from ..domain.money import ZERO, compute_tenant_pays
from ..models import Lease
from .lease_rules import as_field_map, coerce_enum, ensure_dates_ordered, normalize_lease_fields
from .txn import commit_or_raise

log = logging.getLogger("rentledger.leases")


def must_get_lease(db: Session, lease_id: str) -> Lease:
    row = db.get(Lease, str(lease_id))
    if row is None:
        raise NotFoundError("lease", str(lease_id))
    return row


def create_lease(db: Session, payload: Any) -> Lease:
    """
    Entry point for the lease-creation workflow.

    household_id/unit_id are accepted as-is (their owners live elsewhere).
    Bridge leases start at program month 1; total_program_months falls back
    to the configured default.
    """
    data = as_field_map(payload)
    household_id = data.pop("household_id", None)
    unit_id = data.pop("unit_id", None)

    data.setdefault("lease_type", LeaseType.DIRECT.value)
    data.setdefault("status", LeaseStatus.PENDING.value)
    data.setdefault("monthly_rent", ZERO)
    data.setdefault("subsidy_amount", ZERO)

    if "tenant_pays" in data:
        raise LeaseValidationError("tenant_pays", "is derived from monthly_rent - subsidy_amount")

    values = normalize_lease_fields(data)
    ensure_dates_ordered(values.get("start_date"), values.get("end_date"))

    if values["lease_type"] == LeaseType.BRIDGE.value:
        if values.get("program_month") is None:
            values["program_month"] = 1
    elif values.get("program_month") is not None:
        raise LeaseValidationError("program_month", "only bridge leases track a program month")

    if values.get("total_program_months") is None:
        values["total_program_months"] = settings.default_total_program_months

    row = Lease(
        household_id=str(household_id) if household_id is not None else None,
        unit_id=str(unit_id) if unit_id is not None else None,
        **values,
    )
    row.tenant_pays = compute_tenant_pays(row.monthly_rent, row.subsidy_amount)

    db.add(row)
    commit_or_raise(db, op="lease.create")
    log.info("lease.created", extra={"lease_id": row.id})
    return row


def list_leases(
    db: Session,
    *,
    status: Optional[str] = None,
    lease_type: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Lease]:
    q = select(Lease)

    if status is not None:
        q = q.where(Lease.status == coerce_enum(LeaseStatus, status, field="status"))
    if lease_type is not None:
        q = q.where(Lease.lease_type == coerce_enum(LeaseType, lease_type, field="lease_type"))

    n = settings.lease_list_default_limit if limit is None else int(limit)
    n = max(1, min(n, settings.lease_list_max_limit))

    q = q.order_by(desc(Lease.created_at), desc(Lease.id)).limit(n)
    return list(db.scalars(q).all())


def delete_lease(db: Session, lease_id: str) -> None:
    """Deletes the lease; rent_ledger rows go with it (FK ON DELETE CASCADE)."""
    row = must_get_lease(db, lease_id)
    db.delete(row)
    commit_or_raise(db, op="lease.delete", lease_id=str(lease_id))
    log.info("lease.deleted", extra={"lease_id": str(lease_id)})


@dataclass(frozen=True)
class PortfolioSummary:
    total_leases: int
    active_leases: int
    bridge_leases: int
    monthly_tenant_revenue: Decimal


def portfolio_summary(db: Session) -> PortfolioSummary:
    total = db.scalar(select(func.count()).select_from(Lease)) or 0
    active = db.scalar(
        select(func.count()).select_from(Lease).where(Lease.status == LeaseStatus.ACTIVE.value)
    ) or 0
    bridge = db.scalar(
        select(func.count()).select_from(Lease).where(Lease.lease_type == LeaseType.BRIDGE.value)
    ) or 0

    # summed in Python: SQLite SUM() over NUMERIC comes back as float
    revenue = sum(
        db.scalars(select(Lease.tenant_pays).where(Lease.status == LeaseStatus.ACTIVE.value)).all(),
        ZERO,
    )
    return PortfolioSummary(
        total_leases=int(total),
        active_leases=int(active),
        bridge_leases=int(bridge),
        monthly_tenant_revenue=Decimal(revenue),
    )
