# rentledger/routers/leases.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.enums import LeaseStatus, LeaseType
from ..schemas import LeaseCreate, LeaseOut, LeaseUpdate, PortfolioSummaryOut
from ..services.lease_mutator import update_lease
from ..services.lease_registry import (
    create_lease,
    delete_lease,
    list_leases,
    must_get_lease,
    portfolio_summary,
)

router = APIRouter(prefix="/leases", tags=["leases"])


@router.post("", response_model=LeaseOut, status_code=201)
def create_lease_route(payload: LeaseCreate, db: Session = Depends(get_db)):
    return create_lease(db, payload)


@router.get("", response_model=list[LeaseOut])
def list_leases_route(
    status: Optional[LeaseStatus] = Query(default=None),
    lease_type: Optional[LeaseType] = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    return list_leases(db, status=status, lease_type=lease_type, limit=limit)


# declared before /{lease_id} so "summary" is not read as an id
@router.get("/summary", response_model=PortfolioSummaryOut)
def lease_summary(db: Session = Depends(get_db)):
    return portfolio_summary(db)


@router.get("/{lease_id}", response_model=LeaseOut)
def get_lease(lease_id: str, db: Session = Depends(get_db)):
    return must_get_lease(db, lease_id)


@router.patch("/{lease_id}", response_model=LeaseOut)
def patch_lease(lease_id: str, payload: LeaseUpdate, db: Session = Depends(get_db)):
    return update_lease(db, lease_id, payload)


@router.delete("/{lease_id}")
def delete_lease_route(lease_id: str, db: Session = Depends(get_db)):
    delete_lease(db, lease_id)
    return {"ok": True}
