# rentledger/db.py
from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import settings


class Base(DeclarativeBase):
    pass


def _install_sqlite_hooks(engine: Engine) -> None:
    """
    pysqlite defers BEGIN and ignores SAVEPOINT semantics unless we take over
    transaction control, and it leaves foreign keys off by default. The ledger
    relies on both (savepoint around the uniqueness race, cascade on lease delete).
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str) -> Engine:
    eng = create_engine(url, pool_pre_ping=True, future=True)
    if eng.dialect.name == "sqlite":
        _install_sqlite_hooks(eng)
    return eng


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)


def init_db() -> None:
    # local/dev convenience; real deployments run alembic
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    """
    IMPORTANT (Postgres):
    If any SQL statement fails, the transaction is aborted and the session
    cannot run further statements until a rollback happens.

    This dependency guarantees rollback on exceptions so errors don't cascade
    into "InFailedSqlTransaction" on later queries in the same request.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
