# rentledger/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .exception_handlers import setup_exception_handlers
from .logging_config import configure_logging
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.health import router as health_router
from .routers.leases import router as leases_router
from .routers.ledger import router as ledger_router

API_PREFIX = "/api"


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Rent Ledger",
        version=settings.app_version,
    )

    app.add_middleware(StructuredLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(leases_router, prefix=API_PREFIX)
    app.include_router(ledger_router, prefix=API_PREFIX)
    return app


app = create_app()
