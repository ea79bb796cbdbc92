from __future__ import annotations

from datetime import datetime

from sqlalchemy import CHAR, BigInteger, CheckConstraint, DateTime, Identity, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base

SPIN_CODE_STATUS_UNUSED = "UNUSED"
SPIN_CODE_STATUS_USED = "USED"


class SpinCode(Base):
    __tablename__ = "spin_codes"
    __table_args__ = (
        CheckConstraint("status IN ('UNUSED','USED')", name="ck_spin_codes_status"),
        CheckConstraint("code ~ '^[0-9]{5}$'", name="ck_spin_codes_code_format"),
        CheckConstraint(
            "(status = 'USED' AND used_at IS NOT NULL) OR (status = 'UNUSED' AND used_at IS NULL)",
            name="ck_spin_codes_used_at_matches_status",
        ),
        Index("idx_spin_codes_created_at", "created_at"),
        Index("idx_spin_codes_status", "status"),
    )

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    code: Mapped[str] = mapped_column(CHAR(5), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text("'UNUSED'")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("now()")
    )
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
