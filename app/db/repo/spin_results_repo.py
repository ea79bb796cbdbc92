from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.spin_codes import SpinCode
from app.db.models.spin_results import SpinResult


class SpinResultsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, spin_result: SpinResult) -> SpinResult:
        session.add(spin_result)
        await session.flush()
        return spin_result

    @staticmethod
    async def get_by_code_id(session: AsyncSession, code_id: int) -> SpinResult | None:
        stmt = select(SpinResult).where(SpinResult.code_id == code_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_recent(
        session: AsyncSession,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> list[tuple[SpinResult, str]]:
        stmt = (
            select(SpinResult, SpinCode.code)
            .join(SpinCode, SpinCode.id == SpinResult.code_id)
            .order_by(SpinResult.recorded_at.desc(), SpinResult.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return [(spin_result, str(code)) for spin_result, code in result.all()]

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        stmt = select(func.count(SpinResult.id))
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)
