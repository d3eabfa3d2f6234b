# rentledger/domain/errors.py
"""
Error taxonomy for the ledger core.

Services raise these; routers never build HTTPException for domain failures,
main.py maps each class to a status code. Uniqueness races on
(lease_id, ledger_month) are resolved inside the store and have no class here.
"""
from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    status_code = 400
    code = "ledger_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "detail": self.message}


class LeaseValidationError(LedgerError):
    """Rejected before any write; carries the offending field."""

    status_code = 422
    code = "validation_error"

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.reason = message

    def to_dict(self) -> dict:
        return {"code": self.code, "field": self.field, "detail": self.reason}


class NotFoundError(LedgerError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        msg = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(msg)
        self.entity = entity
        self.entity_id = entity_id


class LeaseClosedError(LedgerError):
    """Lease is completed/terminated; financial fields and ledger are frozen."""

    status_code = 409
    code = "lease_closed"

    def __init__(self, lease_id: str, status: str, message: str | None = None):
        super().__init__(message or f"lease {lease_id} is {status}; financial fields are frozen")
        self.lease_id = lease_id
        self.status = status


class LedgerStoreError(LedgerError):
    """Transient persistence failure. Not retried; the caller may resubmit."""

    status_code = 503
    code = "store_unavailable"
