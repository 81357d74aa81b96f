# File: backend/app/api/v1/deps.py
# Version: v0.1.0
"""
Dependency providers for pathogen endpoints.

Wires `PathogenRepository` to the project's canonical DB session provider,
so tests can swap the store by overriding `get_db` alone.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.services.pathogen_store import PathogenRepository


def pathogen_repository(db: Session = Depends(get_db)) -> PathogenRepository:
    """Return a repository bound to the request's session."""
    return PathogenRepository(db)
