# File: backend/app/core/export/target_exporter.py
# Version: v0.1.0
"""
FASTA / CSV export of catalog target sites.

FASTA ID: <pathogen>_<start>_<end>_<plus|minus> (spaces in the name become '_')
FASTA description: strain, Cas type, PAM and GC% of the site.
Sequences are written as stored (already on the site's strand).
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from backend.app.db.schemas.pathogen import Pathogen

CSV_COLUMNS = [
    "pathogen", "strain", "cas_type",
    "sequence", "pam", "start_pos", "end_pos", "strand", "gc_content",
]


def _slug(name: str) -> str:
    return "_".join(name.split())


def target_records(pathogens: Iterable[Pathogen]) -> List[SeqRecord]:
    records: List[SeqRecord] = []
    for p in pathogens:
        for t in p.targets:
            strand = "minus" if t.strand == "-" else "plus"
            rid = f"{_slug(p.name)}_{t.start_pos}_{t.end_pos}_{strand}"
            desc = (
                f"strain={p.strain} cas={p.cas_system.type} "
                f"pam={t.pam} gc={t.gc_content:.1f}"
            )
            records.append(SeqRecord(Seq(t.sequence), id=rid, description=desc))
    return records


def export_targets_to_fasta(pathogens: Iterable[Pathogen], fasta_path: Path) -> int:
    """Write every target site as a FASTA record; returns the record count."""
    records = target_records(pathogens)
    SeqIO.write(records, str(fasta_path), "fasta")
    return len(records)


def export_targets_to_csv(pathogens: Iterable[Pathogen], csv_path: Path) -> int:
    """One row per target site, pathogen columns repeated; returns the row count."""
    n = 0
    with Path(csv_path).open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for p in pathogens:
            for t in p.targets:
                writer.writerow({
                    "pathogen": p.name,
                    "strain": p.strain,
                    "cas_type": p.cas_system.type,
                    "sequence": t.sequence,
                    "pam": t.pam,
                    "start_pos": t.start_pos,
                    "end_pos": t.end_pos,
                    "strand": t.strand,
                    "gc_content": f"{t.gc_content:.3f}",
                })
                n += 1
    return n
