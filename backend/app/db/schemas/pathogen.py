# File: backend/app/db/schemas/pathogen.py
# Version: v0.1.0
"""Pydantic schemas for Pathogen resources.

Read shapes (`Pathogen`, `TargetSite`, `CasSystem`) are what every consumer
sees. Create shapes (`PathogenCreate`, ...) keep every field optional so that
missing values reach the repository, which reports them all at once as a
ValidationError (HTTP 400) before touching the store.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CasSystem(BaseModel):
    type: str = Field(..., description="Cas nuclease variant, e.g. Cas9")
    description: str


class TargetSite(BaseModel):
    sequence: str = Field(..., description="Guide/protospacer sequence (A/C/G/T)")
    pam: str = Field(..., description="Protospacer-adjacent motif, e.g. NGG")
    start_pos: int
    end_pos: int
    strand: str = Field(..., description="'+' or '-'")
    gc_content: float = Field(..., description="GC percentage (0-100)")


class Pathogen(BaseModel):
    id: Optional[str] = None
    name: str
    strain: str
    cas_system: CasSystem
    targets: List[TargetSite] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CasSystemCreate(BaseModel):
    type: Optional[str] = None
    description: Optional[str] = None


class TargetSiteCreate(BaseModel):
    sequence: Optional[str] = None
    pam: Optional[str] = None
    start_pos: Optional[int] = None
    end_pos: Optional[int] = None
    strand: Optional[str] = None
    gc_content: Optional[float] = None


class PathogenCreate(BaseModel):
    """Create request. `id`/timestamps are store-assigned and ignored if sent."""
    name: Optional[str] = None
    strain: Optional[str] = None
    cas_system: Optional[CasSystemCreate] = None
    targets: Optional[List[TargetSiteCreate]] = None
