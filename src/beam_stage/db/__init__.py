"""Database engine, sessions and schema helpers."""

from .session import (
    Base,
    SessionLocal,
    create_tables,
    drop_tables,
    enable_sqlite_foreign_keys,
    get_db,
    utcnow,
)

__all__ = [
    "Base",
    "SessionLocal",
    "create_tables",
    "drop_tables",
    "enable_sqlite_foreign_keys",
    "get_db",
    "utcnow",
]
