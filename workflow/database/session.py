"""Engine and session helpers for SQLAlchemy-backed workflow persistence."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from workflow.core.config import get_config


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite defers BEGIN on its own; emit it ourselves so SAVEPOINT works.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str | None = None) -> Engine:
    """Create an engine for ``database_url`` (defaults to the configured URL)."""
    config = get_config()
    url = database_url or config.DATABASE_URL
    engine = create_engine(url, echo=config.DEBUG)
    if url.startswith("sqlite"):
        _enable_sqlite_savepoints(engine)
    return engine


def build_session_factory(database_url: str | None = None) -> sessionmaker[Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=build_engine(database_url),
    )


@contextmanager
def get_db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Context-manager wrapper for safe DB session lifecycle."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
