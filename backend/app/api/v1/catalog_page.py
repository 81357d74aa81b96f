# File: backend/app/api/v1/catalog_page.py
# Version: v0.2.0
"""
Server-rendered catalog page (root, not under /api).

GET /            -> every pathogen as a card
GET /?name=coli  -> same page filtered by name (blank falls back to all)

Store failures render the page with an inline error banner instead of a 500,
mirroring the list/search behaviour of the interactive shell.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from backend.app.api.v1.deps import pathogen_repository
from backend.app.core.config import settings
from backend.app.core.visualization.catalog_html import render_catalog_page
from backend.app.services.errors import StoreError
from backend.app.services.pathogen_store import PathogenRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog (html)"])


@router.get("/", response_class=HTMLResponse)
def catalog_index(
    name: Optional[str] = Query(None),
    repo: PathogenRepository = Depends(pathogen_repository),
):
    query = name or ""
    error: Optional[str] = None
    pathogens = []
    try:
        pathogens = repo.search_by_name(query) if query.strip() else repo.list_all()
    except StoreError as exc:
        logger.warning("Catalog page could not load pathogens: %s", exc)
        error = "Search failed. Please try again." if query.strip() else "Failed to load pathogens. Please try again."
    html = render_catalog_page(pathogens, query=query, error=error, api_prefix=settings.API_PREFIX)
    return HTMLResponse(html, status_code=200)
