# File: backend/app/api/v1/health.py
# Version: v0.2.0
"""
Healthcheck router.

- GET /health     -> process is up
- GET /health/db  -> store answers a trivial query
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.services.errors import StoreError

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    """Return a minimal health payload."""
    return {"status": "ok"}


@router.get("/health/db")
def health_db(db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StoreError(str(getattr(exc, "orig", None) or exc)) from exc
    return {"status": "ok", "database": db.get_bind().url.get_backend_name()}
