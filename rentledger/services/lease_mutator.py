# rentledger/services/lease_mutator.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from ..config import settings
from ..domain.enums import LeaseType, is_terminal
from ..domain.errors import LeaseClosedError, LeaseValidationError
from ..domain.money import compute_tenant_pays
from ..models import Lease
from .lease_registry import must_get_lease
from .lease_rules import as_field_map, ensure_dates_ordered, normalize_lease_fields
from .txn import commit_or_raise

log = logging.getLogger("rentledger.leases")

_FROZEN_WHEN_CLOSED = ("monthly_rent", "subsidy_amount")


def _ensure_open_for(row: Lease, changes: dict[str, Any]) -> None:
    if not is_terminal(row.status):
        return

    for k in _FROZEN_WHEN_CLOSED:
        if k in changes and changes[k] != getattr(row, k):
            raise LeaseClosedError(row.id, row.status)

    new_status = changes.get("status", row.status)
    if not is_terminal(new_status):
        raise LeaseClosedError(row.id, row.status, f"lease {row.id} is {row.status}; it cannot be reopened")


def update_lease(db: Session, lease_id: str, fields: Any) -> Lease:
    """
    Apply a partial edit and recompute tenant_pays from the post-update
    rent and subsidy, in one commit.

    Ledger entries keep the dues they were created with.
    """
    changes = normalize_lease_fields(as_field_map(fields))
    row = must_get_lease(db, lease_id)

    _ensure_open_for(row, changes)

    ensure_dates_ordered(
        changes.get("start_date", row.start_date),
        changes.get("end_date", row.end_date),
    )

    lease_type = changes.get("lease_type", row.lease_type)
    program_month = changes.get("program_month", row.program_month)
    if lease_type != LeaseType.BRIDGE.value and "program_month" in changes and program_month is not None:
        raise LeaseValidationError("program_month", "only bridge leases track a program month")

    for k, v in changes.items():
        setattr(row, k, v)

    # program_month follows lease_type, as at creation
    if lease_type != LeaseType.BRIDGE.value:
        row.program_month = None
    elif row.program_month is None:
        row.program_month = 1

    if row.total_program_months is None:
        row.total_program_months = settings.default_total_program_months
    row.tenant_pays = compute_tenant_pays(row.monthly_rent, row.subsidy_amount)

    db.add(row)
    commit_or_raise(db, op="lease.update", lease_id=row.id)
    log.info("lease.updated", extra={"lease_id": row.id, "fields": sorted(changes)})
    return row
