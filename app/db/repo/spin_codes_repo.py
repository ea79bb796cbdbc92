from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.spin_codes import SPIN_CODE_STATUS_UNUSED, SPIN_CODE_STATUS_USED, SpinCode
from app.db.models.spin_results import SpinResult


class SpinCodesRepo:
    @staticmethod
    async def try_create(
        session: AsyncSession,
        *,
        code: str,
        created_at: datetime,
    ) -> SpinCode | None:
        """Inserts a fresh UNUSED code; returns None when the value is already taken."""
        stmt = (
            postgresql_insert(SpinCode)
            .values(code=code, status=SPIN_CODE_STATUS_UNUSED, created_at=created_at)
            .on_conflict_do_nothing(index_elements=[SpinCode.code])
            .returning(SpinCode)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_code(session: AsyncSession, code: str) -> SpinCode | None:
        stmt = select(SpinCode).where(SpinCode.code == code)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_code_for_update(session: AsyncSession, code: str) -> SpinCode | None:
        stmt = select(SpinCode).where(SpinCode.code == code).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def mark_used(session: AsyncSession, *, spin_code: SpinCode, used_at: datetime) -> None:
        spin_code.status = SPIN_CODE_STATUS_USED
        spin_code.used_at = used_at
        await session.flush()

    @staticmethod
    async def list_recent_with_results(
        session: AsyncSession,
        *,
        limit: int = 100,
    ) -> list[tuple[SpinCode, SpinResult | None]]:
        stmt = (
            select(SpinCode, SpinResult)
            .outerjoin(SpinResult, SpinResult.code_id == SpinCode.id)
            .order_by(SpinCode.created_at.desc(), SpinCode.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(spin_code, spin_result) for spin_code, spin_result in result.all()]

    @staticmethod
    async def count_by_status(session: AsyncSession) -> dict[str, int]:
        stmt = select(SpinCode.status, func.count(SpinCode.id)).group_by(SpinCode.status)
        result = await session.execute(stmt)
        return {str(status): int(count) for status, count in result.all()}
