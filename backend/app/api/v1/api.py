# File: backend/app/api/v1/api.py
# Version: v0.1.0
"""
v1 API aggregator.

Routers included under /api:
- health
- pathogens (list / search / create)

Additionally, we expose `public_router` that mounts the server-rendered
catalog page at / (root, not under /api), so main.py doesn't need to
import it directly.
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from . import pathogens as pathogens_router
from . import catalog_page as catalog_page_router

# All v1 JSON APIs live under /api via api_router
api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(pathogens_router.router)

# Public (root-level) router; main.py includes it at the app root.
public_router = APIRouter()
public_router.include_router(catalog_page_router.router)
