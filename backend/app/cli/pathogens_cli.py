# File: backend/app/cli/pathogens_cli.py
# Version: v0.1.1
"""
Command-line interface for the pathogen catalog.

Works directly against the configured database (settings.DB_URL, or --db-url)
through PathogenRepository; no API server needed.

Usage:
    python -m backend.app.cli.pathogens_cli init-db
    python -m backend.app.cli.pathogens_cli list [--json]
    python -m backend.app.cli.pathogens_cli search coli [--json]
    python -m backend.app.cli.pathogens_cli add --json seed.json
    python -m backend.app.cli.pathogens_cli export --fasta targets.fasta [--csv targets.csv] [--name coli]

`add --json` accepts a single pathogen object or a list of them (seeding).
Each object is created in its own transaction.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from backend.app.core.config import settings
from backend.app.core.export.target_exporter import export_targets_to_csv, export_targets_to_fasta
from backend.app.db.maintenance import ensure_schema_sqlite
from backend.app.db.schemas.pathogen import Pathogen
from backend.app.db.session import make_engine
from backend.app.services.errors import CatalogError
from backend.app.services.pathogen_store import PathogenRepository

log = logging.getLogger("pathogens_cli")


# ---------- output helpers ----------

def _print_table(pathogens: List[Pathogen]) -> None:
    if not pathogens:
        print("No pathogens found.")
        return
    for p in pathogens:
        print(f"{p.name} [{p.strain}] {p.cas_system.type}: {len(p.targets)} target(s)")
        for t in p.targets:
            print(
                f"  {t.start_pos}-{t.end_pos} ({t.strand}) {t.sequence} "
                f"PAM={t.pam} GC={t.gc_content:.1f}%"
            )


def _print_json(pathogens: List[Pathogen]) -> None:
    print(json.dumps([p.model_dump(mode="json") for p in pathogens], indent=2))


def _load_payloads(path: Path) -> list:
    data = json.loads(path.read_text(encoding="utf-8"))
    return data if isinstance(data, list) else [data]


# ---------- commands ----------

def cmd_init_db(args, engine, repo: PathogenRepository) -> int:
    for action in ensure_schema_sqlite(engine):
        print(action)
    return 0


def cmd_list(args, engine, repo: PathogenRepository) -> int:
    pathogens = repo.list_all()
    (_print_json if args.json else _print_table)(pathogens)
    return 0


def cmd_search(args, engine, repo: PathogenRepository) -> int:
    pathogens = repo.search_by_name(args.name)
    (_print_json if args.json else _print_table)(pathogens)
    return 0


def cmd_add(args, engine, repo: PathogenRepository) -> int:
    try:
        payloads = _load_payloads(args.json_file)
    except (OSError, ValueError) as e:
        log.error("✗ Cannot read %s: %s", args.json_file, e)
        return 1
    n_ok = 0
    for i, payload in enumerate(payloads):
        try:
            created = repo.create(payload)
        except CatalogError as e:
            log.error("✗ Record %d rejected: %s", i, e.message)
            continue
        print(f"created {created.id} {created.name} ({len(created.targets)} targets)")
        n_ok += 1
    log.info("Added %d/%d pathogen(s)", n_ok, len(payloads))
    return 0 if n_ok == len(payloads) else 1


def cmd_export(args, engine, repo: PathogenRepository) -> int:
    pathogens = repo.search_by_name(args.name) if args.name else repo.list_all()
    if args.fasta is None and args.csv is None:
        log.error("Nothing to export: pass --fasta and/or --csv")
        return 2
    if args.fasta is not None:
        n = export_targets_to_fasta(pathogens, args.fasta)
        log.info("FASTA written: %s (%d records)", args.fasta, n)
    if args.csv is not None:
        n = export_targets_to_csv(pathogens, args.csv)
        log.info("CSV written: %s (%d rows)", args.csv, n)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="CRISPR/Cas pathogen catalog CLI")
    p.add_argument("--db-url", default=None, help="SQLAlchemy URL (default: settings.DB_URL)")
    p.add_argument("--log-level", dest="log_level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level (default: INFO)")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("init-db", help="Create missing tables")
    s.set_defaults(func=cmd_init_db)

    s = sub.add_parser("list", help="List all pathogens")
    s.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    s.set_defaults(func=cmd_list)

    s = sub.add_parser("search", help="Search pathogens by name (case-insensitive substring)")
    s.add_argument("name")
    s.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    s.set_defaults(func=cmd_search)

    s = sub.add_parser("add", help="Create pathogen(s) from a JSON file")
    s.add_argument("--json", dest="json_file", required=True, type=Path)
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("export", help="Export target sites as FASTA and/or CSV")
    s.add_argument("--fasta", type=Path, default=None)
    s.add_argument("--csv", type=Path, default=None)
    s.add_argument("--name", default=None, help="Only pathogens whose name contains this")
    s.set_defaults(func=cmd_export)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    engine = make_engine(args.db_url or settings.DB_URL)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = Session()
    try:
        return args.func(args, engine, PathogenRepository(db))
    except CatalogError as e:
        log.error("✗ %s", e.message)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
