# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap.

- Ensures the project root is on sys.path so 'backend.*' imports work without
  an editable install.
- Points the app at an in-memory SQLite URL before anything imports settings.
- Provides per-test `engine`, `db`, `repo` and `client` fixtures backed by one
  in-memory database (StaticPool), with `get_db` overridden for the app.
"""
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DB_URL"] = "sqlite://"
os.environ["SCHEMA_AUTOHEAL"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import backend.app.db.models  # noqa: E402,F401
from backend.app.db.base import Base  # noqa: E402
from backend.app.db.session import get_db, make_engine  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.services.pathogen_store import PathogenRepository  # noqa: E402


@pytest.fixture
def engine():
    eng = make_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db):
    return PathogenRepository(db)


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_payload():
    """Build a create payload; `targets` defaults to one NGG site."""

    def _make(name="Escherichia coli", strain="K-12 MG1655", *, targets=None, cas_type="Cas9"):
        if targets is None:
            targets = [
                {
                    "sequence": "ATCG",
                    "pam": "NGG",
                    "start_pos": 10,
                    "end_pos": 14,
                    "strand": "+",
                    "gc_content": 50.0,
                }
            ]
        return {
            "name": name,
            "strain": strain,
            "cas_system": {"type": cas_type, "description": "Streptococcus pyogenes Cas9"},
            "targets": targets,
        }

    return _make
