# File: backend/app/db/session.py
# Version: v0.1.0
"""
SQLAlchemy engine and session factory.

- Uses SQLite by default (file path from settings.DB_URL).
- Provides `get_db()` FastAPI dependency to manage session lifecycle.
- Creates the parent directory if using SQLite file URLs.

Synchronous on purpose: every request does a handful of small queries.
"""
from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from backend.app.core.config import settings


def make_engine(db_url: str, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    if db_url.startswith("sqlite:///"):
        db_path = db_url.replace("sqlite:///", "", 1)
        Path(db_path).resolve().parent.mkdir(parents=True, exist_ok=True)

    eng = create_engine(db_url, future=True, **kwargs)
    if eng.url.get_backend_name() == "sqlite":
        event.listen(eng, "connect", _sqlite_enable_fks)
    return eng


def _sqlite_enable_fks(dbapi_conn, _record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = make_engine(settings.DB_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and guarantee closing it after use."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
