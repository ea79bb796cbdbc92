from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class SpinResult(Base):
    __tablename__ = "spin_results"
    __table_args__ = (
        CheckConstraint("prize_cents >= 0", name="ck_spin_results_prize_non_negative"),
        CheckConstraint(
            "drawn_probability >= 0 AND drawn_probability <= 1",
            name="ck_spin_results_probability_range",
        ),
        Index("idx_spin_results_recorded_at", "recorded_at"),
        Index("idx_spin_results_outcome_label", "outcome_label"),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    code_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("spin_codes.id"),
        unique=True,
        nullable=False,
    )
    outcome_label: Mapped[str] = mapped_column(String(50), nullable=False)
    prize_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    drawn_probability: Mapped[float] = mapped_column(Float, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
