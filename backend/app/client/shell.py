# File: backend/app/client/shell.py
# Version: v0.1.0
"""
Application shell state for the list/search/add-form UI.

States: LOADING -> READY | ERROR. `show_add_form` is an independent toggle.

- load()/mount(): fetch the full list.
- search(q):      fetch by name (blank q means the full list).
- submit_add_form(payload): on success hide the form and reload; on failure
  set `alert`, keep the form open and keep the draft for resubmission.

There are no optimistic updates: `pathogens` only changes from a server
response. Requests are not sequenced, so a later response overwrites an
earlier one.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Union

from backend.app.client.api_client import ApiError, PathogenApiClient
from backend.app.db.schemas.pathogen import Pathogen, PathogenCreate

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load pathogens. Please try again."
SEARCH_FAILED = "Search failed. Please try again."
ADD_FAILED = "Failed to add pathogen. Please try again."


class ShellStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class CatalogShell:
    def __init__(self, api: PathogenApiClient) -> None:
        self.api = api
        self.status: ShellStatus = ShellStatus.LOADING
        self.pathogens: List[Pathogen] = []
        self.error: Optional[str] = None
        self.show_add_form: bool = False
        self.alert: Optional[str] = None
        self.draft: Optional[Union[PathogenCreate, Mapping[str, Any]]] = None

    # ---------- list / search ----------

    def mount(self) -> ShellStatus:
        return self.load()

    def load(self) -> ShellStatus:
        return self._fetch(self.api.list_pathogens, LOAD_FAILED)

    def search(self, query: str) -> ShellStatus:
        return self._fetch(lambda: self.api.search_pathogens(query), SEARCH_FAILED)

    def _fetch(self, call: Callable[[], List[Pathogen]], failure_message: str) -> ShellStatus:
        self.status = ShellStatus.LOADING
        self.error = None
        try:
            self.pathogens = call()
        except ApiError as exc:
            logger.error("%s (%s)", failure_message, exc)
            self.error = failure_message
            self.status = ShellStatus.ERROR
        else:
            self.status = ShellStatus.READY
        return self.status

    # ---------- add form ----------

    def open_add_form(self) -> None:
        self.show_add_form = True
        self.alert = None

    def cancel_add_form(self) -> None:
        self.show_add_form = False
        self.alert = None

    def submit_add_form(self, payload: Union[PathogenCreate, Mapping[str, Any]]) -> Optional[Pathogen]:
        """Create through the API; returns the created pathogen or None on failure."""
        self.draft = payload
        self.alert = None
        try:
            created = self.api.create_pathogen(payload)
        except ApiError as exc:
            logger.error("Error adding pathogen: %s", exc)
            self.alert = ADD_FAILED
            self.show_add_form = True
            return None

        self.show_add_form = False
        self.draft = None
        self.load()
        return created
