# File: backend/app/db/maintenance.py
# Version: v0.1.0
"""
SQLite schema maintenance helpers (dev-only, non-destructive).

- ensure_schema_sqlite(engine): creates only tables that are missing.
- This module imports `backend.app.db.models` (not just Base), so the
  pathogens/target_sites tables are registered in Base.metadata.

Usage:
  Set env var SCHEMA_AUTOHEAL=true and keep your DB backend as sqlite.
  On app startup, ensure_schema_sqlite(engine) will run and create any
  missing tables, logging each action.

Notes:
  * Safe to run multiple times; it never drops or alters existing tables.
  * Use Alembic migrations for staging/production changes.
"""
from __future__ import annotations

from typing import List

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

# Side-effect import: defines Pathogen/TargetSite on the shared Base.
import backend.app.db.models as models  # noqa: F401
from backend.app.db.base import Base


def ensure_schema_sqlite(engine: Engine) -> List[str]:
    """
    Create any missing tables declared on Base.metadata.

    Returns a list of human-readable action strings (e.g., "created table pathogens").
    """
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())

    actions: List[str] = []
    # sorted_tables keeps parents ahead of children (pathogens before target_sites)
    for table in Base.metadata.sorted_tables:
        if table.name in existing:
            continue
        table.create(bind=engine, checkfirst=True)
        actions.append(f"created table {table.name}")

    if not actions:
        actions.append("all tables present")

    return actions
