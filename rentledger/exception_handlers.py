# rentledger/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .domain.errors import LedgerError, LedgerStoreError

log = logging.getLogger("rentledger.errors")


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        if exc.status_code >= 500:
            log.warning("ledger_error", extra={"path": request.url.path, "error": exc.message})
        return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)

    # reads that hit a dead connection never pass through commit_or_raise
    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        log.exception("store_error", extra={"path": request.url.path, "error": str(exc)})
        wrapped = LedgerStoreError("storage unavailable; retry the request")
        return JSONResponse(content=wrapped.to_dict(), status_code=wrapped.status_code)
