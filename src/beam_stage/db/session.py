"""Engine, session factory and declarative base."""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from beam_stage.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def utcnow() -> datetime:
    """Timestamp default for ``created_at`` columns.

    Set client-side so rows inserted within the same second still order
    correctly on backends whose ``now()`` has one-second resolution.
    """
    return datetime.now(UTC)


# Models must be registered on Base.metadata before create_all runs.
import beam_stage.models  # noqa: E402,F401


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for SQLite connections.

    SQLite ignores ``ON DELETE CASCADE`` and foreign key violations unless the
    pragma is set on every new connection.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url`` with the pragmas this app needs."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    new_engine = create_engine(
        database_url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args=connect_args,
    )
    enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create every table known to the models."""
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    """Drop every table known to the models."""
    Base.metadata.drop_all(bind=bind or engine)
