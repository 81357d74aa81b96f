# File: backend/app/services/pathogen_store.py
# Version: v0.2.0
"""
Data access layer for pathogens and their CRISPR target sites.

`PathogenRepository` receives its store handle (a SQLAlchemy Session) at
construction, so routers, the CLI and tests can hand it whatever session they
own. It translates between the flat `pathogens` / `target_sites` rows and the
nested read shape (`Pathogen` with an embedded `cas_system` and its `targets`).

Ordering contracts:
- list_all / search_by_name: pathogens by name ASC, targets by start_pos ASC.
- create: targets in request (insertion) order.

create() is a single transaction: the pathogen row is flushed first to obtain
its id, then the target rows are inserted, then everything commits. Any store
failure rolls back both phases, so no parent row is left without its targets.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.db import models
from backend.app.db.schemas import pathogen as schemas
from backend.app.services.errors import StoreError, ValidationError

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

TARGET_REQUIRED_FIELDS = ("sequence", "pam", "start_pos", "end_pos", "strand", "gc_content")

CreatePayload = Union[schemas.PathogenCreate, schemas.Pathogen, Mapping[str, Any]]


# ---------- helpers ----------

def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so `term` matches literally."""
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def _as_float(value: Any) -> float:
    # Legacy NUMERIC columns surface Decimal; some stores hand back text.
    return float(value)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops the offset on DateTime(timezone=True); values are stored as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _store_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def to_target_site(row: models.TargetSite) -> schemas.TargetSite:
    return schemas.TargetSite(
        sequence=row.sequence,
        pam=row.pam,
        start_pos=row.start_pos,
        end_pos=row.end_pos,
        strand=row.strand,
        gc_content=_as_float(row.gc_content),
    )


def to_pathogen(row: models.Pathogen, targets: Iterable[models.TargetSite]) -> schemas.Pathogen:
    """Shape a pathogen row plus its (already ordered) target rows."""
    return schemas.Pathogen(
        id=row.id,
        name=row.name,
        strain=row.strain,
        cas_system=schemas.CasSystem(type=row.cas_type, description=row.cas_description),
        targets=[to_target_site(t) for t in targets],
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def coerce_create_payload(payload: CreatePayload) -> schemas.PathogenCreate:
    """Normalize any accepted create input into a PathogenCreate."""
    if isinstance(payload, schemas.PathogenCreate):
        return payload
    if isinstance(payload, schemas.Pathogen):
        payload = payload.model_dump(exclude={"id", "created_at", "updated_at"})
    if not isinstance(payload, Mapping):
        raise ValidationError("Pathogen payload must be a JSON object")
    try:
        return schemas.PathogenCreate.model_validate(payload)
    except PydanticValidationError as exc:
        fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        raise ValidationError(f"Invalid fields: {', '.join(fields)}", fields=fields) from exc


def missing_fields(data: schemas.PathogenCreate) -> List[str]:
    """Return dotted names of every missing/blank required field."""
    missing: List[str] = []
    if _blank(data.name):
        missing.append("name")
    if _blank(data.strain):
        missing.append("strain")

    if data.cas_system is None:
        missing.append("cas_system")
    else:
        if _blank(data.cas_system.type):
            missing.append("cas_system.type")
        if _blank(data.cas_system.description):
            missing.append("cas_system.description")

    if not data.targets:
        missing.append("targets")
    else:
        for idx, target in enumerate(data.targets):
            for field in TARGET_REQUIRED_FIELDS:
                if _blank(getattr(target, field)):
                    missing.append(f"targets[{idx}].{field}")
    return missing


def _warn_suspicious_targets(name: str, targets: List[schemas.TargetSiteCreate]) -> None:
    # Accepted as-is; only flagged in the log.
    for idx, t in enumerate(targets):
        if t.end_pos < t.start_pos:
            logger.warning("%s targets[%d]: end_pos %d < start_pos %d", name, idx, t.end_pos, t.start_pos)
        if not 0.0 <= t.gc_content <= 100.0:
            logger.warning("%s targets[%d]: gc_content %.2f outside [0, 100]", name, idx, t.gc_content)
        if t.strand not in ("+", "-"):
            logger.warning("%s targets[%d]: unexpected strand %r", name, idx, t.strand)


# ---------- repository ----------

class PathogenRepository:
    """Read/create access to the pathogen catalog over one Session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> List[schemas.Pathogen]:
        """All pathogens ordered by name, each with targets ordered by start_pos."""
        stmt = select(models.Pathogen).order_by(models.Pathogen.name)
        return self._fetch_shaped(stmt, "list")

    def search_by_name(self, term: Optional[str]) -> List[schemas.Pathogen]:
        """
        Case-insensitive literal substring match on name.

        A blank or whitespace-only term is the same as list_all().
        """
        if term is None or not term.strip():
            return self.list_all()
        pattern = f"%{escape_like(term)}%"
        stmt = (
            select(models.Pathogen)
            .where(models.Pathogen.name.ilike(pattern, escape=LIKE_ESCAPE))
            .order_by(models.Pathogen.name)
        )
        return self._fetch_shaped(stmt, "search")

    def create(self, payload: CreatePayload) -> schemas.Pathogen:
        """
        Persist one pathogen and all of its targets atomically.

        Raises ValidationError (nothing persisted) when a required field is
        missing, StoreError when either insert phase fails (rolled back).
        """
        data = coerce_create_payload(payload)
        missing = missing_fields(data)
        if missing:
            raise ValidationError.missing(missing)
        _warn_suspicious_targets(data.name, data.targets)

        try:
            now = models.utcnow()
            row = models.Pathogen(
                name=data.name,
                strain=data.strain,
                cas_type=data.cas_system.type,
                cas_description=data.cas_system.description,
                created_at=now,
                updated_at=now,
            )
            self.db.add(row)
            self.db.flush()  # phase 1: parent row, id assigned

            target_rows = [
                models.TargetSite(
                    pathogen_id=row.id,
                    sequence=t.sequence,
                    pam=t.pam,
                    start_pos=t.start_pos,
                    end_pos=t.end_pos,
                    strand=t.strand,
                    gc_content=t.gc_content,
                )
                for t in data.targets
            ]
            self.db.add_all(target_rows)
            self.db.flush()  # phase 2: children
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Creating pathogen %r failed; transaction rolled back", data.name)
            raise StoreError(_store_message(exc)) from exc

        logger.info("Created pathogen %s (%s) with %d target(s)", row.id, row.name, len(target_rows))
        return to_pathogen(row, target_rows)

    def count(self) -> Tuple[int, int]:
        """Return (pathogen rows, target rows)."""
        try:
            n_pathogens = self.db.scalar(select(func.count()).select_from(models.Pathogen)) or 0
            n_targets = self.db.scalar(select(func.count()).select_from(models.TargetSite)) or 0
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(_store_message(exc)) from exc
        return int(n_pathogens), int(n_targets)

    # ---------- internals ----------

    def _fetch_shaped(self, stmt, op: str) -> List[schemas.Pathogen]:
        # Any failure (parent or children) aborts the whole call.
        try:
            rows = list(self.db.execute(stmt).scalars())
            by_parent = self._targets_by_pathogen([r.id for r in rows])
            shaped = [to_pathogen(r, by_parent.get(r.id, [])) for r in rows]
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Pathogen %s query failed", op)
            raise StoreError(_store_message(exc)) from exc
        return shaped

    def _targets_by_pathogen(self, ids: List[str]) -> Dict[str, List[models.TargetSite]]:
        grouped: Dict[str, List[models.TargetSite]] = defaultdict(list)
        if not ids:
            return grouped
        stmt = (
            select(models.TargetSite)
            .where(models.TargetSite.pathogen_id.in_(ids))
            .order_by(models.TargetSite.start_pos, models.TargetSite.end_pos, models.TargetSite.id)
        )
        for t in self.db.execute(stmt).scalars():
            grouped[t.pathogen_id].append(t)
        return grouped
