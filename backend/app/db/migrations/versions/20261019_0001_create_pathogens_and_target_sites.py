# File: backend/app/db/migrations/versions/20261019_0001_create_pathogens_and_target_sites.py
# Version: v0.1.0
"""
Create `pathogens` and `target_sites` (target_sites.pathogen_id -> pathogens.id, cascade).

Idempotent for SQLite/local dev: skips tables that already exist
(e.g. created earlier by SCHEMA_AUTOHEAL or `pathogens_cli init-db`).

Revision ID: 0001_create_pathogens_and_target_sites
Revises: None
Create Date: 2026-10-19

Run:
  alembic upgrade head
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_create_pathogens_and_target_sites"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    tables = set(sa.inspect(bind).get_table_names())

    if "pathogens" not in tables:
        op.create_table(
            "pathogens",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("strain", sa.Text(), nullable=False),
            sa.Column("cas_type", sa.Text(), nullable=False),
            sa.Column("cas_description", sa.Text(), nullable=False),
        )
        op.create_index("ix_pathogens_name", "pathogens", ["name"])

    if "target_sites" not in tables:
        op.create_table(
            "target_sites",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column(
                "pathogen_id",
                sa.String(length=36),
                sa.ForeignKey("pathogens.id", name="fk_target_sites_pathogen_id_pathogens", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("sequence", sa.Text(), nullable=False),
            sa.Column("pam", sa.Text(), nullable=False),
            sa.Column("start_pos", sa.Integer(), nullable=False),
            sa.Column("end_pos", sa.Integer(), nullable=False),
            sa.Column("strand", sa.Text(), nullable=False),
            sa.Column("gc_content", sa.Float(), nullable=False),
        )
        op.create_index("ix_target_sites_pathogen_id", "target_sites", ["pathogen_id"])


def downgrade() -> None:
    bind = op.get_bind()
    tables = set(sa.inspect(bind).get_table_names())

    if "target_sites" in tables:
        op.drop_index("ix_target_sites_pathogen_id", table_name="target_sites")
        op.drop_table("target_sites")
    if "pathogens" in tables:
        op.drop_index("ix_pathogens_name", table_name="pathogens")
        op.drop_table("pathogens")
