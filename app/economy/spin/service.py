from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.models.spin_codes import SPIN_CODE_STATUS_USED, SpinCode
from app.db.models.spin_results import SpinResult
from app.db.repo.spin_codes_repo import SpinCodesRepo
from app.db.repo.spin_results_repo import SpinResultsRepo
from app.economy.spin.codes import generate_spin_code, validate_spin_code
from app.economy.spin.errors import (
    SpinCodeAlreadyUsedError,
    SpinCodeGenerationError,
    SpinCodeNotFoundError,
)
from app.economy.spin.outcomes import OutcomeSelector, get_outcome_selector
from app.economy.spin.types import IssuedSpinCode, SpinCodeStatus, SpinRedemption

logger = structlog.get_logger(__name__)


def _as_issued(spin_code: SpinCode) -> IssuedSpinCode:
    return IssuedSpinCode(
        id=spin_code.id,
        code=spin_code.code,
        status=spin_code.status,
        created_at=spin_code.created_at,
    )


class SpinLedger:
    @staticmethod
    def clamp_issue_count(count: int) -> int:
        if count <= 0:
            raise ValueError("count must be positive")
        return min(count, get_settings().spin_issue_max_count)

    @staticmethod
    async def _create_unique_code(
        session: AsyncSession,
        *,
        now_utc: datetime,
        max_attempts: int,
    ) -> SpinCode:
        for attempt in range(1, max_attempts + 1):
            candidate = generate_spin_code()
            spin_code = await SpinCodesRepo.try_create(session, code=candidate, created_at=now_utc)
            if spin_code is not None:
                return spin_code
            logger.info("spin_code_candidate_conflict", attempt=attempt)

        raise SpinCodeGenerationError(f"no free spin code after {max_attempts} attempts")

    @staticmethod
    async def issue(
        session: AsyncSession,
        *,
        count: int,
        now_utc: datetime | None = None,
    ) -> list[IssuedSpinCode]:
        now_utc = now_utc or datetime.now(timezone.utc)
        target_count = SpinLedger.clamp_issue_count(count)
        max_attempts = get_settings().spin_issue_max_attempts_per_code

        issued: list[IssuedSpinCode] = []
        for _ in range(target_count):
            spin_code = await SpinLedger._create_unique_code(
                session,
                now_utc=now_utc,
                max_attempts=max_attempts,
            )
            issued.append(_as_issued(spin_code))

        logger.info("spin_codes_issued", requested=count, generated=len(issued))
        return issued

    @staticmethod
    async def verify(session: AsyncSession, *, code: str) -> SpinCodeStatus:
        """Advisory lookup; a valid answer does not reserve the code."""
        value = validate_spin_code(code)
        spin_code = await SpinCodesRepo.get_by_code(session, value)
        if spin_code is None:
            raise SpinCodeNotFoundError
        if spin_code.status == SPIN_CODE_STATUS_USED:
            raise SpinCodeAlreadyUsedError
        return SpinCodeStatus(code=spin_code.code, status=spin_code.status, valid=True)

    @staticmethod
    async def redeem(
        session: AsyncSession,
        *,
        code: str,
        selector: OutcomeSelector | None = None,
        now_utc: datetime | None = None,
    ) -> SpinRedemption:
        value = validate_spin_code(code)
        now_utc = now_utc or datetime.now(timezone.utc)
        selector = selector or get_outcome_selector()

        spin_code = await SpinCodesRepo.get_by_code_for_update(session, value)
        if spin_code is None:
            logger.info("spin_redeem_rejected", reason="not_found")
            raise SpinCodeNotFoundError
        if spin_code.status == SPIN_CODE_STATUS_USED:
            logger.info("spin_redeem_rejected", reason="already_used", code_id=spin_code.id)
            raise SpinCodeAlreadyUsedError

        outcome = selector.draw()

        await SpinCodesRepo.mark_used(session, spin_code=spin_code, used_at=now_utc)
        try:
            spin_result = await SpinResultsRepo.create(
                session,
                spin_result=SpinResult(
                    id=uuid4(),
                    code_id=spin_code.id,
                    outcome_label=outcome.label,
                    prize_cents=outcome.payout_cents,
                    drawn_probability=outcome.weight,
                    recorded_at=now_utc,
                ),
            )
        except IntegrityError as exc:
            # another transaction already recorded a result for this code
            raise SpinCodeAlreadyUsedError from exc

        logger.info(
            "spin_code_redeemed",
            code_id=spin_code.id,
            spin_id=str(spin_result.id),
            outcome=outcome.label,
            prize_cents=outcome.payout_cents,
        )
        return SpinRedemption(
            spin_id=spin_result.id,
            code_id=spin_code.id,
            code=spin_code.code,
            outcome_label=spin_result.outcome_label,
            prize_cents=spin_result.prize_cents,
            drawn_probability=spin_result.drawn_probability,
            recorded_at=spin_result.recorded_at,
        )
