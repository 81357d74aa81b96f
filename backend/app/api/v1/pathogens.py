# File: backend/app/api/v1/pathogens.py
# Version: v0.1.0
"""
Pathogens API.

Endpoints
---------
GET  /pathogens                 List all pathogens (name ASC, targets by start_pos ASC)
GET  /pathogens/search?name=    Case-insensitive substring search on name
POST /pathogens                 Create a pathogen with its target sites (201)

Errors are raised as catalog errors and rendered by the app-level handlers
as `{"error": "<message>"}`: ValidationError -> 400, StoreError -> 500.
"""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from backend.app.api.v1.deps import pathogen_repository
from backend.app.db.schemas.pathogen import Pathogen, PathogenCreate
from backend.app.services.errors import ValidationError
from backend.app.services.pathogen_store import PathogenRepository

router = APIRouter(prefix="/pathogens", tags=["pathogens"])


@router.get("", response_model=List[Pathogen])
def list_pathogens(repo: PathogenRepository = Depends(pathogen_repository)):
    return repo.list_all()


@router.get("/search", response_model=List[Pathogen])
def search_pathogens(
    name: Optional[str] = Query(None, description="Substring of the pathogen name (case-insensitive)"),
    repo: PathogenRepository = Depends(pathogen_repository),
):
    if not name:
        raise ValidationError("Name query parameter is required", fields=["name"])
    return repo.search_by_name(name)


@router.post("", response_model=Pathogen, status_code=status.HTTP_201_CREATED)
def create_pathogen(
    payload: PathogenCreate,
    repo: PathogenRepository = Depends(pathogen_repository),
):
    """
    Create a pathogen and all its targets in one transaction.

    Duplicate submissions create duplicate rows (no idempotency key).
    """
    return repo.create(payload)
