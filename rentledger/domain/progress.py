# rentledger/domain/progress.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from ..config import settings
from .enums import LeaseType


def percent_complete(program_month: Optional[int], total_program_months: Optional[int] = None) -> int:
    """
    Bridge-program completion, 0..100.

    - program_month missing or <= 0 -> 0
    - total missing -> configured default (24); total <= 0 -> 0
    - program_month >= total -> 100
    - otherwise round half up of program_month / total * 100
    """
    if program_month is None or program_month <= 0:
        return 0

    total = settings.default_total_program_months if total_program_months is None else total_program_months
    if total <= 0:
        return 0
    if program_month >= total:
        return 100

    pct = (Decimal(program_month) * 100 / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(pct)))


def bridge_progress(lease: Any) -> Optional[int]:
    """Progress for bridge leases only; None for every other lease type."""
    if getattr(lease, "lease_type", None) != LeaseType.BRIDGE.value:
        return None
    return percent_complete(
        getattr(lease, "program_month", None),
        getattr(lease, "total_program_months", None),
    )
