# File: backend/app/services/errors.py
# Version: v0.1.0
"""
Error taxonomy for the pathogen catalog.

- ValidationError -> missing required input, raised before any persistence (HTTP 400)
- StoreError      -> any failure from the underlying store (HTTP 500, message verbatim)
- NotFoundError   -> reserved for lookups by id (HTTP 404)
"""
from __future__ import annotations

from typing import Iterable, Optional


class CatalogError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = 400

    def __init__(self, message: str, *, fields: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])

    @classmethod
    def missing(cls, fields: Iterable[str]) -> "ValidationError":
        fields = list(fields)
        return cls(f"Missing required fields: {', '.join(fields)}", fields=fields)


class StoreError(CatalogError):
    status_code = 500


class NotFoundError(CatalogError):
    status_code = 404
