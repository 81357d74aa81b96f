# File: backend/app/main.py
# Version: v0.1.0
"""
FastAPI app entry.

- Keeps all route assembly in backend/app/api/v1/api.py.
- Mounts /api/* via `api_router`.
- Mounts the HTML catalog page at / via `public_router`.
- Renders catalog errors as `{"error": "<message>"}` with their HTTP status.
- Optional SQLite auto-heal is guarded by SCHEMA_AUTOHEAL.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api.v1.api import api_router, public_router
from backend.app.core.config import settings
from backend.app.db.session import engine
from backend.app.db.maintenance import ensure_schema_sqlite
from backend.app.services.errors import CatalogError

logging.basicConfig(
    level=settings.log_level_value,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def _catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


# APIs under /api
app.include_router(api_router, prefix=settings.API_PREFIX)

# HTML catalog at root /
app.include_router(public_router)


@app.on_event("startup")
def _startup_autoheal() -> None:
    # Only try auto-heal if explicitly enabled AND using SQLite
    if engine.url.get_backend_name() == "sqlite" and settings.SCHEMA_AUTOHEAL:
        actions = ensure_schema_sqlite(engine)
        logger.info("[schema-autoheal] %s", ", ".join(actions))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL)
