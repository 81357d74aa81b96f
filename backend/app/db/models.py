# File: backend/app/db/models.py
# Version: v0.2.0
"""
ORM models for the pathogen catalog.

Tables:
- Pathogen:   a named organism/strain with its Cas system descriptor
              (flattened into `cas_type` / `cas_description` columns).
- TargetSite: a genomic target interval owned by exactly one Pathogen
              (FK `target_sites.pathogen_id`, cascading delete).

v0.2.0:
- Free-text columns are TEXT and `gc_content` is FLOAT, so accepted values
  are stored as sent on every backend (no rounding, no length overflow).
- `utcnow()` is public so the repository can stamp both timestamps at once.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import String, Integer, DateTime, Float, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pathogen(Base):
    """A bacterial pathogen record."""
    __tablename__ = "pathogens"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    strain: Mapped[str] = mapped_column(Text, nullable=False)
    cas_type: Mapped[str] = mapped_column(Text, nullable=False)
    cas_description: Mapped[str] = mapped_column(Text, nullable=False)

    targets: Mapped[List["TargetSite"]] = relationship(
        back_populates="pathogen",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TargetSite(Base):
    """A CRISPR target site on the pathogen genome."""
    __tablename__ = "target_sites"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    pathogen_id: Mapped[str] = mapped_column(
        ForeignKey("pathogens.id", ondelete="CASCADE"), nullable=False, index=True
    )

    sequence: Mapped[str] = mapped_column(Text, nullable=False)
    pam: Mapped[str] = mapped_column(Text, nullable=False)
    start_pos: Mapped[int] = mapped_column(Integer, nullable=False)
    end_pos: Mapped[int] = mapped_column(Integer, nullable=False)
    strand: Mapped[str] = mapped_column(Text, nullable=False)
    gc_content: Mapped[float] = mapped_column(Float, nullable=False)  # percent, stored unrounded

    pathogen: Mapped[Pathogen] = relationship(back_populates="targets")
