# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from decimal import Decimal

import pytest

# must be set before rentledger.config / rentledger.db are imported
_DB_DIR = tempfile.mkdtemp(prefix="rentledger-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("APP_ENV", "local")

from rentledger.db import Base, SessionLocal, engine, init_db  # noqa: E402
from rentledger.models import Lease, RentLedgerEntry  # noqa: E402
from rentledger.services.lease_registry import create_lease  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    db = SessionLocal()
    try:
        db.query(RentLedgerEntry).delete()
        db.query(Lease).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.rollback()
        s.close()


@pytest.fixture
def make_lease(db):
    """Create a lease through the registry; rent 1200 / subsidy 300 unless overridden."""

    def _make(**overrides) -> Lease:
        payload = {
            "household_id": "hh-1",
            "unit_id": "unit-1",
            "lease_type": "direct",
            "status": "active",
            "monthly_rent": Decimal("1200"),
            "subsidy_amount": Decimal("300"),
        }
        payload.update(overrides)
        return create_lease(db, payload)

    return _make
