# File: backend/app/client/api_client.py
# Version: v0.1.0
"""
HTTP client for the pathogens API (httpx).

Any non-2xx response raises ApiError carrying the server's `error` text.
A blank search query is answered by the list endpoint on this side, since
the search endpoint rejects an empty `name`.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

import httpx

from backend.app.db.schemas.pathogen import Pathogen, PathogenCreate

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"[{status_code}] {message}")
        self.status_code = status_code
        self.message = message


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        if "error" in body:
            return str(body["error"])
        if "detail" in body:  # FastAPI request validation (422)
            return str(body["detail"])
    return resp.text


class PathogenApiClient:
    """Thin wrapper over GET/POST /api/pathogens."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        api_prefix: str = "/api",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._prefix = api_prefix.rstrip("/")

    def __enter__(self) -> "PathogenApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def list_pathogens(self) -> List[Pathogen]:
        data = self._request("GET", "/pathogens")
        return [Pathogen.model_validate(item) for item in data]

    def search_pathogens(self, query: str) -> List[Pathogen]:
        if not query or not query.strip():
            return self.list_pathogens()
        data = self._request("GET", "/pathogens/search", params={"name": query})
        return [Pathogen.model_validate(item) for item in data]

    def create_pathogen(self, payload: Union[PathogenCreate, Pathogen, Mapping[str, Any]]) -> Pathogen:
        if isinstance(payload, (PathogenCreate, Pathogen)):
            body = payload.model_dump(mode="json", exclude={"id", "created_at", "updated_at"}, exclude_none=True)
        else:
            body = dict(payload)
        data = self._request("POST", "/pathogens", json=body)
        return Pathogen.model_validate(data)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self._prefix}{path}"
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(0, str(exc)) from exc
        if resp.is_error:
            raise ApiError(resp.status_code, _error_message(resp))
        return resp.json()
