# File: backend/app/db/base.py
# Version: v0.1.0
"""
Declarative Base for the pathogen catalog.

Model modules import Base from here:

    from backend.app.db.base import Base

We do NOT import model modules here to avoid circular imports. Instead,
the migrations env and maintenance helpers import `backend.app.db.models`.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
