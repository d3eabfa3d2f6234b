# rentledger/routers/ledger.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import LedgerEntryOut, PaymentIn
from ..services.ledger_store import get_or_create_entry, list_entries
from ..services.payment_recorder import record_payment

router = APIRouter(prefix="/leases/{lease_id}/ledger", tags=["ledger"])


@router.get("", response_model=list[LedgerEntryOut])
def list_ledger(lease_id: str, db: Session = Depends(get_db)):
    return list_entries(db, lease_id)


@router.get("/{month}", response_model=LedgerEntryOut)
def get_month(lease_id: str, month: str, db: Session = Depends(get_db)):
    # first look at a month materializes its entry with the lease's current dues
    return get_or_create_entry(db, lease_id, month)


@router.put("/{month}", response_model=LedgerEntryOut)
def put_payment(lease_id: str, month: str, payload: PaymentIn, db: Session = Depends(get_db)):
    return record_payment(db, lease_id, month, payload)
