# File: backend/app/db/migrations/env.py
# Version: v0.1.0
"""
Alembic environment for the pathogen catalog.

- Ensures repo root is on sys.path so `import backend...` works regardless of CWD.
- Uses DB_URL / DATABASE_URL env vars when present, otherwise falls back to alembic.ini.
- Registers the SQLAlchemy models on Base.metadata so `--autogenerate` can detect schema changes.
"""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# --------------------------------------------------------------------------------------
# Make the repository importable no matter where Alembic is invoked from
# This file lives at: backend/app/db/migrations/env.py
# --------------------------------------------------------------------------------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
REPO_ROOT = os.path.abspath(os.path.join(THIS_DIR, "../../../../"))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

# Importing models populates Base.metadata (pathogens, target_sites).
import backend.app.db.models  # noqa: F401,E402
from backend.app.db.base import Base  # noqa: E402

# --------------------------------------------------------------------------------------
# Alembic configuration
# --------------------------------------------------------------------------------------
config = context.config

# Configure logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _db_url() -> str:
    url = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not set and sqlalchemy.url is empty in alembic.ini. "
            "Set a valid connection string (e.g., sqlite:///./pathogens.db)."
        )
    return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL, no DBAPI needed)."""
    context.configure(
        url=_db_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a live connection."""
    config.set_main_option("sqlalchemy.url", _db_url())

    connectable = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
