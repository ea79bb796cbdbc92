"""spin_codes_and_results

Revision ID: 5b1e0c7a9d21
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "5b1e0c7a9d21"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "spin_codes",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("code", sa.CHAR(5), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default=sa.text("'UNUSED'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("status IN ('UNUSED','USED')", name="ck_spin_codes_status"),
        sa.CheckConstraint("code ~ '^[0-9]{5}$'", name="ck_spin_codes_code_format"),
        sa.CheckConstraint(
            "(status = 'USED' AND used_at IS NOT NULL) OR (status = 'UNUSED' AND used_at IS NULL)",
            name="ck_spin_codes_used_at_matches_status",
        ),
        sa.UniqueConstraint("code", name="spin_codes_code_key"),
    )
    op.create_index("idx_spin_codes_created_at", "spin_codes", ["created_at"])
    op.create_index("idx_spin_codes_status", "spin_codes", ["status"])

    op.create_table(
        "spin_results",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("code_id", sa.BigInteger(), nullable=False),
        sa.Column("outcome_label", sa.String(50), nullable=False),
        sa.Column("prize_cents", sa.Integer(), nullable=False),
        sa.Column("drawn_probability", sa.Float(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("prize_cents >= 0", name="ck_spin_results_prize_non_negative"),
        sa.CheckConstraint(
            "drawn_probability >= 0 AND drawn_probability <= 1",
            name="ck_spin_results_probability_range",
        ),
        sa.ForeignKeyConstraint(["code_id"], ["spin_codes.id"]),
        sa.UniqueConstraint("code_id", name="spin_results_code_id_key"),
    )
    op.create_index("idx_spin_results_recorded_at", "spin_results", ["recorded_at"])
    op.create_index("idx_spin_results_outcome_label", "spin_results", ["outcome_label"])


def downgrade() -> None:
    op.drop_index("idx_spin_results_outcome_label", table_name="spin_results")
    op.drop_index("idx_spin_results_recorded_at", table_name="spin_results")
    op.drop_table("spin_results")
    op.drop_index("idx_spin_codes_status", table_name="spin_codes")
    op.drop_index("idx_spin_codes_created_at", table_name="spin_codes")
    op.drop_table("spin_codes")
