# rentledger/services/txn.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.errors import LedgerStoreError

log = logging.getLogger("rentledger.store")


def commit_or_raise(db: Session, *, op: str, **ctx: Any) -> None:
    """
    Commit the unit of work or roll it back and raise LedgerStoreError.
    No retry here: the row stays at its last committed state.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("commit_failed op=%s", op, extra={"error": str(e), **ctx})
        raise LedgerStoreError(f"{op} failed; nothing was saved") from e
