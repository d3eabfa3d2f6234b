# rentledger/domain/enums.py
from __future__ import annotations

from enum import Enum


class LeaseType(str, Enum):
    DIRECT = "direct"
    SUBLEASE = "sublease"  # master lease held by an intermediary
    BRIDGE = "bridge"


class LeaseStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    TERMINATED = "terminated"


class CollectionMethod(str, Enum):
    CASH = "cash"
    CHECK = "check"
    BANK_TRANSFER = "bank_transfer"


class LandlordPaymentMethod(str, Enum):
    CHECK = "check"
    ACH = "ach"
    WIRE = "wire"


TERMINAL_STATUSES = frozenset({LeaseStatus.COMPLETED, LeaseStatus.TERMINATED})

LEASE_TYPE_LABELS = {
    LeaseType.DIRECT: "Direct",
    LeaseType.SUBLEASE: "Master Sublease",
    LeaseType.BRIDGE: "Bridge Program",
}


def lease_type_label(value: str | LeaseType) -> str:
    try:
        return LEASE_TYPE_LABELS[LeaseType(value)]
    except ValueError:
        return str(value)


def is_terminal(status: str | LeaseStatus | None) -> bool:
    if status is None:
        return False
    try:
        return LeaseStatus(status) in TERMINAL_STATUSES
    except ValueError:
        return False
